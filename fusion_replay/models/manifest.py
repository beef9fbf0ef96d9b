"""
Pydantic schema for a recording's index.json.
"""
from __future__ import annotations

from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field


class ManifestEntry(BaseModel):
    """
    One primary frame:
    - idx:     recorder's frame counter (kept for reference only)
    - t_ns:    capture time, epoch nanoseconds
    - streams: stream name -> relative file path (color, depth_color, lidar_rev)
    """
    model_config = ConfigDict(extra="ignore")

    idx: Optional[int] = None
    t_ns: int
    streams: Dict[str, Optional[str]] = Field(default_factory=dict)


class Manifest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    version: int = 1
    frames: List[ManifestEntry]
