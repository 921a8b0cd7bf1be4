"""Server-sent event stream of live snapshots."""
from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from moodpoll.api.state import AppState, get_state

router = APIRouter()

_STREAM_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


@router.get("/events")
async def events(state: AppState = Depends(get_state)):
    """`hello` snapshot on connect, then `update` snapshots and keep-alive comments."""
    return StreamingResponse(
        state.channels.stream(),
        media_type="text/event-stream",
        headers=_STREAM_HEADERS,
    )
