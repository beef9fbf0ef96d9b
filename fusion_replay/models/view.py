"""
Pydantic models for the 2D map layout.
"""
from __future__ import annotations

from typing import List, Optional
from pydantic import BaseModel


class PixelPoint(BaseModel):
    px: float
    py: float


class AnchorPx(PixelPoint):
    id: str
    active: bool


class TagPx(PixelPoint):
    id: str
    # anchors with a nonzero range, drawn as tag->anchor lines
    linked_anchors: List[str]


class ViewLayoutResponse(BaseModel):
    """
    World window -> pixel layout for a container of width x height px.

    - ppm: pixels per meter (same on both axes)
    - offset_x/offset_y: top-left corner of the drawing area
    - x_ticks/y_ticks: grid positions in meters
    """
    width: float
    height: float
    ppm: float
    drawing_width: float
    drawing_height: float
    offset_x: float
    offset_y: float
    x_domain: List[float]
    y_domain: List[float]
    x_ticks: List[float]
    y_ticks: List[float]
    anchors: List[AnchorPx]
    tag: Optional[TagPx] = None
