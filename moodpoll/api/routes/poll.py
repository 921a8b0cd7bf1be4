"""Voting endpoints: tag options, tallies, vote, reset."""
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException
from pydantic import BaseModel, Field

from moodpoll.api.state import AppState, get_state
from moodpoll.core.votes import VoteValidationError

router = APIRouter()


class VoteBody(BaseModel):
    # Left untyped so a non-array value reaches validation and gets a 400
    moods: Any = Field(default_factory=list)
    paces: Any = Field(default_factory=list)


@router.get("/meta")
async def get_meta(state: AppState = Depends(get_state)):
    """Sorted distinct mood and pace tags across the catalog."""
    return state.catalog.meta()


@router.get("/poll-stats")
async def get_poll_stats(state: AppState = Depends(get_state)):
    return state.votes.stats()


@router.post("/vote")
async def vote(
    body: VoteBody | None = Body(None),
    state: AppState = Depends(get_state),
):
    """Count one vote for each listed mood and pace, then push the new ranking."""
    if body is None:
        body = VoteBody()
    try:
        state.vote(body.moods, body.paces)
    except VoteValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"ok": True}


@router.post("/reset")
async def reset(state: AppState = Depends(get_state)):
    """Clear all tallies and played flags."""
    state.reset()
    return {"ok": True}
