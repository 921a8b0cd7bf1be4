"""Score songs from vote tallies and order the playlist."""
from dataclasses import replace
from typing import Iterable, List

from moodpoll.models.poll import TagCounts
from moodpoll.models.song import RankedSong, Song


def score_song(song: Song, mood_counts: TagCounts, pace_counts: TagCounts) -> int:
    """Sum of the counts of the song's tags; tags nobody voted for count 0."""
    mood_score = sum(mood_counts.get(m, 0) for m in song.moods)
    pace_score = sum(pace_counts.get(p, 0) for p in song.paces)
    return mood_score + pace_score


def _sort_key(ranked: RankedSong):
    # Unplayed first, then highest score, then name ignoring case
    return (ranked.played, -ranked.score, ranked.name.casefold(), ranked.name)


def rank(songs: Iterable[Song], mood_counts: TagCounts, pace_counts: TagCounts) -> List[RankedSong]:
    """Score every song from scratch and return them in playlist order."""
    # Copies: later toggles must not show through an already built ranking
    ranked = [
        RankedSong(song=replace(s), score=score_song(s, mood_counts, pace_counts))
        for s in songs
    ]
    ranked.sort(key=_sort_key)
    return ranked
