"""Vote tallies and the snapshot pushed to listeners."""
from dataclasses import dataclass
from typing import Dict, List

from moodpoll.models.song import RankedSong

TagCounts = Dict[str, int]


@dataclass(frozen=True)
class Snapshot:
    """Counts and ranked playlist at one instant."""
    mood_counts: TagCounts
    pace_counts: TagCounts
    playlist: List[RankedSong]

    def to_event(self, type_: str) -> dict:
        return {
            "type": type_,
            "moodCounts": dict(self.mood_counts),
            "paceCounts": dict(self.pace_counts),
            "playlist": [s.to_dict() for s in self.playlist],
        }
