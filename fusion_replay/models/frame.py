"""
Pydantic models for assembled-frame API responses.
"""
from __future__ import annotations

from typing import List, Optional
from pydantic import BaseModel, Field


class Point3(BaseModel):
    x: float
    y: float
    z: float


class TagModel(BaseModel):
    """UWB tag: position (m) and ranges to anchors A0..A3 (m)."""
    id: str
    position: Point3
    ranges: List[float]


class BeamModel(BaseModel):
    """mmWave beam power profile (one value per beam) and its peak beam."""
    power: List[float]
    peak_index: int


class FrameResponse(BaseModel):
    """
    Current playback frame.

    - ordinal:   position in the sorted manifest
    - source_index: the frame's idx as written in index.json
    - t_ns:      frame time (epoch ns)
    - color_url / depth_url: blob URLs, null when the image is absent
    - count:     number of lidar points
    - points:    flattened [x0, y0, x1, y1, ...] in the world frame (meters)
    - intensity: per-point intensity in [0, 1]
    - tag / beam: last known UWB / mmWave sample, null if none yet
    """
    ordinal: int
    source_index: int = 0
    t_ns: int
    frame_count: int
    playing: bool
    color_url: Optional[str] = None
    depth_url: Optional[str] = None
    count: int = 0
    points: List[float] = Field(default_factory=list)
    intensity: List[float] = Field(default_factory=list)
    tag: Optional[TagModel] = None
    beam: Optional[BeamModel] = None


class DemoFrameResponse(BaseModel):
    """Synthetic frame for demo mode (same point layout as FrameResponse)."""
    count: int
    points: List[float]
    intensity: List[float]
    tag: TagModel
    beam: BeamModel
