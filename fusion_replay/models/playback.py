"""
Pydantic models for playback control.
"""
from __future__ import annotations

from typing import Optional
from pydantic import BaseModel, ConfigDict, model_validator


class PlaybackStatus(BaseModel):
    loaded: bool
    name: str = ""
    frame_count: int = 0
    ordinal: Optional[int] = None
    playing: bool = False
    uwb_files: int = 0
    mmwave_files: int = 0
    dropped_ticks: int = 0


class ControlResponse(PlaybackStatus):
    """Status after a control call; `signal` is the cursor's answer."""
    signal: str


class LoadRequest(BaseModel):
    """Either a recording name under the data dir, or an explicit directory path."""
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = None
    path: Optional[str] = None

    @model_validator(mode="after")
    def _one_of(self):
        if not self.name and not self.path:
            raise ValueError("name or path required")
        return self
