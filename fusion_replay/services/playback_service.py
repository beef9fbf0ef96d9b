from __future__ import annotations
import os
from typing import List

from ..core import config as C
from ..core.session import PlaybackSession
from ..models import ControlResponse, LoadRequest, PlaybackStatus
from ..recording.cursor import CursorSignal
from ..recording.errors import PermissionDenied
from ..recording.storage import LocalDirectoryStorage, list_recordings


def get_status_service(session: PlaybackSession) -> PlaybackStatus:
    return PlaybackStatus(**session.snapshot())


def control_response(session: PlaybackSession, sig: CursorSignal) -> ControlResponse:
    return ControlResponse(signal=sig.value, **session.snapshot())


def list_recordings_service(data_dir: str = C.DATA_DIR) -> List[dict]:
    return list_recordings(data_dir)


def resolve_recording_dir(req: LoadRequest, data_dir: str = C.DATA_DIR) -> str:
    """Directory for a load request; names are confined to data_dir."""
    if req.path:
        return os.path.abspath(req.path)
    base = os.path.abspath(data_dir)
    full = os.path.abspath(os.path.join(base, req.name))
    if os.path.dirname(full) != base:
        raise PermissionDenied(f"invalid recording name: {req.name}")
    return full


async def load_recording_service(session: PlaybackSession, req: LoadRequest,
                                 data_dir: str = C.DATA_DIR) -> PlaybackStatus:
    """Raises LoadError; the session keeps its previous recording in that case."""
    storage = LocalDirectoryStorage(resolve_recording_dir(req, data_dir))
    await session.load(storage)
    return get_status_service(session)
