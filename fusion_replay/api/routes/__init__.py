from fastapi import APIRouter

from .status import router as status_router
from .recordings import router as recordings_router
from .playback import router as playback_router
from .frame import router as frame_router

router = APIRouter(prefix="/api/v1")

router.include_router(status_router)
router.include_router(recordings_router)
router.include_router(playback_router)
router.include_router(frame_router)
