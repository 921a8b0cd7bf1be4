"""Ranked playlist and played toggling."""
from fastapi import APIRouter, Depends, HTTPException

from moodpoll.api.state import AppState, get_state
from moodpoll.core.catalog import SongNotFound

router = APIRouter()


@router.get("/playlist")
async def get_playlist(state: AppState = Depends(get_state)):
    """Current ranking; computed on request, nothing is broadcast."""
    return [s.to_dict() for s in state.playlist()]


@router.post("/songs/{song_id}/toggle")
async def toggle_song(song_id: str, state: AppState = Depends(get_state)):
    """Flip a song's played flag."""
    try:
        played = state.toggle(song_id)
    except SongNotFound:
        raise HTTPException(status_code=404, detail="Song not found")
    return {"ok": True, "played": played}
