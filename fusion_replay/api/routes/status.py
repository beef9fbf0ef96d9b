"""
Status and reset routes.
"""
from fastapi import APIRouter

from ..deps import get_shared, get_session
from ...models import PlaybackStatus
from ...services.playback_service import get_status_service

router = APIRouter(tags=["status"])


@router.get("/status", response_model=PlaybackStatus)
def status():
    """Get the current playback status."""
    return get_status_service(get_session())


@router.post("/reset")
async def reset():
    """Unload the current recording."""
    get_shared().reset()
    return {"ok": True}
