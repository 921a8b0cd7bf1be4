"""Shared application state (injected into routes)."""
from pathlib import Path
from typing import List

from fastapi import Request

from moodpoll.config import CHANNEL_QUEUE_SIZE, SONGS_PATH
from moodpoll.core.catalog import Catalog, load_songs
from moodpoll.core.channels import ChannelManager
from moodpoll.core.ranking import rank
from moodpoll.core.votes import VoteAggregator
from moodpoll.models.poll import Snapshot
from moodpoll.models.song import RankedSong, Song


class AppState:
    """Owns the catalog, the tallies and the open channels for one app instance.

    Every mutation completes before its broadcast is built, so listeners never
    see a half-applied vote, toggle or reset.
    """

    def __init__(self, songs: List[Song], max_pending: int = CHANNEL_QUEUE_SIZE) -> None:
        self.catalog = Catalog(songs)
        self.votes = VoteAggregator()
        self.channels = ChannelManager(self.snapshot, max_pending=max_pending)

    @classmethod
    def from_file(cls, path: Path = SONGS_PATH) -> "AppState":
        return cls(load_songs(path))

    def playlist(self) -> List[RankedSong]:
        return rank(self.catalog.songs, self.votes.mood_counts, self.votes.pace_counts)

    def snapshot(self) -> Snapshot:
        return Snapshot(
            mood_counts=dict(self.votes.mood_counts),
            pace_counts=dict(self.votes.pace_counts),
            playlist=self.playlist(),
        )

    def vote(self, moods, paces) -> None:
        self.votes.record_vote(moods, paces)
        self.channels.broadcast()

    def toggle(self, song_id: str) -> bool:
        played = self.catalog.toggle(song_id)
        self.channels.broadcast()
        return played

    def reset(self) -> None:
        self.votes.reset()
        self.catalog.clear_played()
        self.channels.broadcast()


def get_state(request: Request) -> AppState:
    return request.app.state.poll
