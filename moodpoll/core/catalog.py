"""Song catalog: load from the static JSON asset, toggle played, list tags."""
import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

from moodpoll.models.song import Song

logger = logging.getLogger(__name__)

_KNOWN_FIELDS = ("id", "name", "moods", "paces", "played")


class SongNotFound(KeyError):
    """No catalog entry with the requested id."""

    def __init__(self, song_id: str) -> None:
        super().__init__(song_id)
        self.song_id = song_id

    def __str__(self) -> str:
        return f"Song not found: {self.song_id}"


def _tag_list(value) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(t) for t in value]


def _song_from_entry(item: dict) -> Song:
    """Build a Song from one catalog entry. Raises TypeError/KeyError when malformed."""
    song_id, name = item["id"], item["name"]
    played = item.get("played", False)
    if isinstance(song_id, bool) or not isinstance(song_id, (str, int)):
        raise TypeError(f"bad id {song_id!r}")
    if not isinstance(name, str):
        raise TypeError(f"bad name {name!r}")
    if not isinstance(played, bool):
        raise TypeError(f"bad played flag {played!r}")
    return Song(
        id=str(song_id),
        name=name,
        moods=_tag_list(item.get("moods")),
        paces=_tag_list(item.get("paces")),
        played=played,
        extra={k: v for k, v in item.items() if k not in _KNOWN_FIELDS},
    )


def load_songs(path: Path) -> List[Song]:
    """Load songs from disk. Accepts a bare array or {"songs": [...]}."""
    if not path.exists():
        logger.warning("Song catalog %s not found; starting with no songs", path)
        return []
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Could not read song catalog %s: %s", path, e)
        return []
    if isinstance(data, dict):
        data = data.get("songs", [])
    if not isinstance(data, list):
        logger.warning("Song catalog %s is not a list of songs", path)
        return []

    out: List[Song] = []
    seen = set()
    for item in data:
        try:
            song = _song_from_entry(item)
        except (KeyError, TypeError, AttributeError):
            logger.warning("Skipping malformed catalog entry: %r", item)
            continue
        if song.id in seen:
            logger.warning("Skipping duplicate song id %s", song.id)
            continue
        seen.add(song.id)
        out.append(song)
    return out


class Catalog:
    """Fixed song list; the played flag is the only mutable part."""

    def __init__(self, songs: List[Song]) -> None:
        self._songs = list(songs)
        self._by_id: Dict[str, Song] = {s.id: s for s in self._songs}

    @property
    def songs(self) -> List[Song]:
        return self._songs

    def __len__(self) -> int:
        return len(self._songs)

    def get(self, song_id: str) -> Optional[Song]:
        return self._by_id.get(song_id)

    def toggle(self, song_id: str) -> bool:
        """Flip the played flag and return the new value."""
        song = self._by_id.get(song_id)
        if song is None:
            raise SongNotFound(song_id)
        song.played = not song.played
        return song.played

    def clear_played(self) -> None:
        for song in self._songs:
            song.played = False

    def meta(self) -> dict:
        """Sorted distinct mood and pace tags across all songs."""
        moods = set()
        paces = set()
        for song in self._songs:
            moods.update(song.moods)
            paces.update(song.paces)
        return {"moods": sorted(moods), "paces": sorted(paces)}
