"""
Playback control routes.
"""
from fastapi import APIRouter, Query

from ..deps import get_session
from ...models import ControlResponse
from ...services.playback_service import control_response

router = APIRouter(prefix="/playback", tags=["playback"])


@router.post("/play", response_model=ControlResponse)
async def play():
    session = get_session()
    return control_response(session, session.play())


@router.post("/pause", response_model=ControlResponse)
async def pause():
    session = get_session()
    return control_response(session, session.pause())


@router.post("/toggle", response_model=ControlResponse)
async def toggle():
    session = get_session()
    return control_response(session, session.toggle_play())


@router.post("/step", response_model=ControlResponse)
async def step():
    """Advance exactly one frame (works while paused)."""
    session = get_session()
    return control_response(session, await session.step())


@router.post("/seek", response_model=ControlResponse)
async def seek(ordinal: int = Query(..., description="Target frame ordinal (clamped)")):
    session = get_session()
    return control_response(session, await session.seek(ordinal))
