"""Data models for songs, tallies, and snapshots."""
from moodpoll.models.poll import Snapshot, TagCounts
from moodpoll.models.song import RankedSong, Song

__all__ = [
    "RankedSong",
    "Snapshot",
    "Song",
    "TagCounts",
]
