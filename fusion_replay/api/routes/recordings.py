"""
Recording discovery and loading routes.
"""
from fastapi import APIRouter

from ..deps import get_shared, get_session
from ...core.logging_setup import get_logger
from ...models import LoadRequest
from ...recording.errors import LoadError
from ...services.playback_service import list_recordings_service, load_recording_service

log = get_logger(__name__)

router = APIRouter(prefix="/recordings", tags=["recordings"])


@router.get("")
def recording_list():
    """List recording directories under the data dir."""
    try:
        return list_recordings_service(get_shared().data_dir)
    except OSError as e:
        return {"error": str(e)}


@router.post("/load")
async def recording_load(req: LoadRequest):
    """
    Load a recording and show its first frame.
    Body: {"name": "<dir under data dir>"} or {"path": "/abs/dir"}.
    On failure the previously loaded recording is kept.
    """
    try:
        status = await load_recording_service(get_session(), req, get_shared().data_dir)
    except LoadError as e:
        log.warning("[recordings] load failed: %s", e,
                    extra={"extra": {"kind": e.kind, "request": req.model_dump(exclude_none=True)}})
        return {"error": str(e), "kind": e.kind}
    return {"ok": True, **status.model_dump()}
