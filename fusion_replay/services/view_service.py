from __future__ import annotations
from typing import Optional

from ..core import config as C
from ..models import AnchorPx, TagPx, ViewLayoutResponse
from ..recording.models import PositionSample
from ..utils.geometry import ViewLayout


def get_view_layout_service(width: float, height: float, margin: float = C.VIEW_MARGIN_PX,
                            tag: Optional[PositionSample] = None,
                            ticks: int = C.VIEW_TICKS) -> ViewLayoutResponse:
    """
    Pixel layout of the shared lidar/UWB map for a width x height container,
    with anchors and (optionally) the tag already projected.
    """
    layout = ViewLayout.build(width, height, margin)
    fit = layout.fit

    anchors = []
    for a in C.UWB_ANCHORS:
        px, py = layout.to_px(a["x"], a["y"])
        anchors.append(AnchorPx(id=a["id"], active=a["active"], px=px, py=py))

    tag_px = None
    if tag is not None:
        px, py = layout.to_px(tag.x, tag.y)
        linked = [C.UWB_ANCHORS[i]["id"] for i, r in enumerate(tag.ranges)
                  if i < len(C.UWB_ANCHORS) and r > 0]
        tag_px = TagPx(id=tag.id, px=px, py=py, linked_anchors=linked)

    return ViewLayoutResponse(
        width=width,
        height=height,
        ppm=fit.ppm,
        drawing_width=fit.drawing_width,
        drawing_height=fit.drawing_height,
        offset_x=fit.offset_x,
        offset_y=fit.offset_y,
        x_domain=[layout.x_scale.domain_min, layout.x_scale.domain_max],
        y_domain=[layout.y_scale.domain_min, layout.y_scale.domain_max],
        x_ticks=layout.x_scale.ticks(ticks),
        y_ticks=layout.y_scale.ticks(ticks),
        anchors=anchors,
        tag=tag_px,
    )
