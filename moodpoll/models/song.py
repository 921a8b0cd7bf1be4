"""Catalog songs and their ranked view."""
from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class Song:
    """Catalog entry. Only `played` changes after load."""
    id: str
    name: str
    moods: List[str] = field(default_factory=list)
    paces: List[str] = field(default_factory=list)
    played: bool = False
    extra: Dict[str, Any] = field(default_factory=dict)  # passthrough fields, e.g. artist

    def to_dict(self) -> dict:
        return {
            **self.extra,
            "id": self.id,
            "name": self.name,
            "moods": list(self.moods),
            "paces": list(self.paces),
            "played": self.played,
        }


@dataclass
class RankedSong:
    """Song plus the score computed for one ranking pass."""
    song: Song
    score: int

    @property
    def id(self) -> str:
        return self.song.id

    @property
    def name(self) -> str:
        return self.song.name

    @property
    def played(self) -> bool:
        return self.song.played

    def to_dict(self) -> dict:
        return {**self.song.to_dict(), "score": self.score}
