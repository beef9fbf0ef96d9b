"""
Current frame, image blobs and map layout routes.
"""
from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import Response

from ..deps import get_shared, get_session
from ...core import config as C
from ...models import DemoFrameResponse, FrameResponse, ViewLayoutResponse
from ...services.demo_service import get_demo_frame_service
from ...services.frame_service import get_frame_service
from ...services.view_service import get_view_layout_service

router = APIRouter(tags=["frame"])


@router.get("/frame", response_model=FrameResponse)
def frame():
    """The assembled frame at the current playback position."""
    out = get_frame_service(get_session())
    if out is None:
        raise HTTPException(status_code=404, detail="no recording loaded")
    return out


@router.get("/blobs/{handle}")
def blob(handle: str):
    """Image bytes for a handle; 404 once the frame that owned it was superseded."""
    b = get_session().blobs.get(handle)
    if b is None:
        raise HTTPException(status_code=404, detail="blob released or unknown")
    return Response(content=b.data, media_type=b.media_type)


@router.get("/view", response_model=ViewLayoutResponse)
def view(
    width: float = Query(..., gt=0, description="Container width (px)"),
    height: float = Query(..., gt=0, description="Container height (px)"),
    margin: float = Query(C.VIEW_MARGIN_PX, ge=0, description="Margin on each side (px)"),
):
    """Pixel layout of the lidar/UWB map, with the current tag projected."""
    f = get_session().frame
    return get_view_layout_service(width, height, margin, tag=f.tag if f else None)


@router.get("/demo/frame", response_model=DemoFrameResponse)
def demo_frame(points: int = Query(C.DEMO_POINT_COUNT, ge=40, le=20000)):
    """Synthetic frame for the live demo mode."""
    return get_demo_frame_service(get_shared().demo, points)
