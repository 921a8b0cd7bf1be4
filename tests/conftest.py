"""Shared fixtures: a fresh catalog, state and client per test."""
import asyncio
import json

import pytest
from fastapi.testclient import TestClient

from moodpoll.api.app import create_app
from moodpoll.api.state import AppState
from moodpoll.models.song import Song


def make_songs():
    return [
        Song(id="a", name="Alpha", moods=["happy"], paces=[]),
        Song(id="b", name="Beta", moods=[], paces=["fast"]),
    ]


def drain(channel):
    """Return every queued message on a channel without blocking."""
    out = []
    while channel.pending():
        out.append(asyncio.run(channel.receive()))
    return out


def parse_event(message):
    assert message.startswith("data: ")
    assert message.endswith("\n\n")
    return json.loads(message[len("data: "):])


@pytest.fixture
def songs():
    return make_songs()


@pytest.fixture
def state(songs):
    return AppState(songs)


@pytest.fixture
def frontend_dir(tmp_path):
    d = tmp_path / "frontend"
    d.mkdir()
    (d / "index.html").write_text("<html>poll</html>")
    (d / "script.js").write_text("console.log('poll');")
    return d


@pytest.fixture
def app(state, frontend_dir):
    return create_app(state, frontend_dir=frontend_dir)


@pytest.fixture
def client(app):
    """Client without lifespan, so no background loops run."""
    return TestClient(app)
