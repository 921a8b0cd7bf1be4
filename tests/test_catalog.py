"""Tests for catalog loading, toggling and tag listing."""
import json

import pytest

from moodpoll.core.catalog import Catalog, SongNotFound, load_songs
from moodpoll.models.song import Song


def _write(tmp_path, data):
    path = tmp_path / "songs.json"
    path.write_text(json.dumps(data))
    return path


class TestLoadSongs:
    def test_loads_array(self, tmp_path):
        path = _write(tmp_path, [
            {"id": "a", "name": "Alpha", "moods": ["happy"], "paces": []},
            {"id": "b", "name": "Beta", "paces": ["fast"], "played": True},
        ])
        songs = load_songs(path)
        assert [s.id for s in songs] == ["a", "b"]
        assert songs[0].moods == ["happy"]
        assert songs[1].moods == []
        assert songs[1].played is True

    def test_loads_songs_key(self, tmp_path):
        path = _write(tmp_path, {"songs": [{"id": "a", "name": "Alpha"}]})
        assert [s.name for s in load_songs(path)] == ["Alpha"]

    def test_keeps_extra_fields(self, tmp_path):
        path = _write(tmp_path, [{"id": "a", "name": "Alpha", "artist": "Band", "year": 1999}])
        assert load_songs(path)[0].extra == {"artist": "Band", "year": 1999}

    def test_missing_file_is_empty(self, tmp_path):
        assert load_songs(tmp_path / "nope.json") == []

    def test_invalid_json_is_empty(self, tmp_path):
        path = tmp_path / "songs.json"
        path.write_text("{not json")
        assert load_songs(path) == []

    def test_skips_malformed_entries(self, tmp_path):
        path = _write(tmp_path, [
            {"name": "No id"},
            {"id": "x"},
            "just a string",
            {"id": "a", "name": "Alpha"},
        ])
        assert [s.id for s in load_songs(path)] == ["a"]

    @pytest.mark.parametrize(
        "entry",
        [
            {"id": "a", "name": None},
            {"id": "a", "name": 42},
            {"id": None, "name": "Alpha"},
            {"id": "a", "name": "Alpha", "played": "false"},
            {"id": "a", "name": "Alpha", "played": 1},
        ],
    )
    def test_skips_entries_with_wrong_types(self, tmp_path, entry):
        path = _write(tmp_path, [entry, {"id": "b", "name": "Beta"}])
        assert [s.id for s in load_songs(path)] == ["b"]

    def test_numeric_id_becomes_string(self, tmp_path):
        path = _write(tmp_path, [{"id": 7, "name": "Seven"}])
        assert load_songs(path)[0].id == "7"

    def test_duplicate_ids_keep_first(self, tmp_path):
        path = _write(tmp_path, [
            {"id": "a", "name": "First"},
            {"id": "a", "name": "Second"},
        ])
        songs = load_songs(path)
        assert len(songs) == 1
        assert songs[0].name == "First"


class TestCatalog:
    def test_toggle_flips_and_returns_state(self, songs):
        catalog = Catalog(songs)
        assert catalog.toggle("a") is True
        assert catalog.get("a").played is True

    def test_toggle_twice_restores(self, songs):
        catalog = Catalog(songs)
        catalog.toggle("b")
        assert catalog.toggle("b") is False
        assert catalog.get("b").played is False

    def test_toggle_unknown_raises(self, songs):
        catalog = Catalog(songs)
        with pytest.raises(SongNotFound):
            catalog.toggle("zzz")

    def test_clear_played(self, songs):
        catalog = Catalog(songs)
        catalog.toggle("a")
        catalog.toggle("b")
        catalog.clear_played()
        assert not any(s.played for s in catalog.songs)

    def test_meta_sorted_distinct(self):
        catalog = Catalog([
            Song(id="1", name="One", moods=["sad", "happy"], paces=["slow"]),
            Song(id="2", name="Two", moods=["happy", "calm"], paces=["fast", "slow"]),
        ])
        assert catalog.meta() == {"moods": ["calm", "happy", "sad"], "paces": ["fast", "slow"]}

    def test_meta_empty_catalog(self):
        assert Catalog([]).meta() == {"moods": [], "paces": []}
