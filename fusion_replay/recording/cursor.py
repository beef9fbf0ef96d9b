"""
Playback cursor: position and play/pause over a loaded recording.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional

from ..utils.math import clip
from .models import PlaybackState


class CursorSignal(str, Enum):
    ADVANCED = "advanced"
    END_OF_RECORDING = "end_of_recording"
    SOUGHT = "sought"
    OK = "ok"
    NOT_LOADED = "not_loaded"


class PlaybackCursor:
    """
    Idle until a state is attached. Every operation on an Idle cursor returns
    NOT_LOADED instead of raising.
    """

    def __init__(self, state: Optional[PlaybackState] = None):
        self.state = state

    @property
    def loaded(self) -> bool:
        return self.state is not None

    @property
    def playing(self) -> bool:
        return self.state is not None and self.state.playing

    @property
    def ordinal(self) -> Optional[int]:
        return None if self.state is None else self.state.current_ordinal

    def attach(self, state: PlaybackState):
        """Replace the loaded recording wholesale."""
        self.state = state

    def detach(self) -> Optional[PlaybackState]:
        state, self.state = self.state, None
        return state

    def advance(self) -> CursorSignal:
        """Step exactly one frame. At the last frame nothing moves."""
        s = self.state
        if s is None:
            return CursorSignal.NOT_LOADED
        if s.current_ordinal >= s.last_ordinal:
            return CursorSignal.END_OF_RECORDING
        s.current_ordinal += 1
        return CursorSignal.ADVANCED

    def seek(self, ordinal: int) -> CursorSignal:
        """
        Jump to a clamped ordinal. The retained UWB tag is dropped since a
        jump makes it stale; the mmWave profile is kept.
        """
        s = self.state
        if s is None:
            return CursorSignal.NOT_LOADED
        s.current_ordinal = int(clip(int(ordinal), 0, s.last_ordinal))
        s.retained_tag = None
        return CursorSignal.SOUGHT

    def play(self) -> CursorSignal:
        if self.state is None:
            return CursorSignal.NOT_LOADED
        self.state.playing = True
        return CursorSignal.OK

    def pause(self) -> CursorSignal:
        if self.state is None:
            return CursorSignal.NOT_LOADED
        self.state.playing = False
        return CursorSignal.OK

    def toggle_play(self) -> CursorSignal:
        if self.state is None:
            return CursorSignal.NOT_LOADED
        self.state.playing = not self.state.playing
        return CursorSignal.OK
