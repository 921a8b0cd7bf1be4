"""Mood and pace vote tallies."""
from typing import Any

from moodpoll.models.poll import TagCounts


class VoteValidationError(ValueError):
    """Vote payload fields are not lists of tags."""


def _check_tags(field: str, value: Any) -> None:
    if not isinstance(value, (list, tuple)):
        raise VoteValidationError("moods and paces must be arrays")
    for tag in value:
        if not isinstance(tag, str):
            raise VoteValidationError(f"{field} must contain only strings")


class VoteAggregator:
    """Tag -> count maps for moods and paces. Counts only ever go up until reset."""

    def __init__(self) -> None:
        self.mood_counts: TagCounts = {}
        self.pace_counts: TagCounts = {}

    def record_vote(self, moods: Any, paces: Any) -> None:
        """Add one to every listed tag; repeated tags count repeatedly.
        Both fields are validated before anything is counted."""
        _check_tags("moods", moods)
        _check_tags("paces", paces)
        for m in moods:
            self.mood_counts[m] = self.mood_counts.get(m, 0) + 1
        for p in paces:
            self.pace_counts[p] = self.pace_counts.get(p, 0) + 1

    def reset(self) -> None:
        # Unseen tags read as zero, so dropping keys is the same as zeroing them
        self.mood_counts.clear()
        self.pace_counts.clear()

    def stats(self) -> dict:
        return {"moodCounts": dict(self.mood_counts), "paceCounts": dict(self.pace_counts)}
