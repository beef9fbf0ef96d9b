"""
PlaybackSession: the owner of one loaded recording.

Runs on the asyncio loop. Storage reads happen in a worker thread, but only
one assembly is ever in flight; ticks that arrive meanwhile are dropped.
Every load/seek/advance bumps a generation counter, and an assembly that
finishes under an older generation is thrown away (its image handles are
revoked) and the current position is assembled again.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Optional

from ..recording import catalog
from ..recording.assembler import FrameAssembler
from ..recording.blobs import BlobRegistry
from ..recording.cursor import CursorSignal, PlaybackCursor
from ..recording.models import AssembledFrame, PlaybackState
from ..recording.storage import StorageProvider

log = logging.getLogger(__name__)


class PlaybackSession:
    def __init__(self, blobs: Optional[BlobRegistry] = None):
        self.blobs = blobs if blobs is not None else BlobRegistry()
        self.cursor = PlaybackCursor()
        self.storage: Optional[StorageProvider] = None
        self.assembler: Optional[FrameAssembler] = None
        self.frame: Optional[AssembledFrame] = None
        self.dropped_ticks = 0
        self._generation = 0
        self._in_flight = False

    # ---- introspection ----
    @property
    def state(self) -> Optional[PlaybackState]:
        return self.cursor.state

    @property
    def loaded(self) -> bool:
        return self.cursor.loaded

    @property
    def busy(self) -> bool:
        return self._in_flight

    def snapshot(self) -> dict:
        s = self.state
        return {
            "loaded": s is not None,
            "name": s.name if s else "",
            "frame_count": s.frame_count if s else 0,
            "ordinal": s.current_ordinal if s else None,
            "playing": bool(s and s.playing),
            "uwb_files": len(s.tag_index) if s else 0,
            "mmwave_files": len(s.beam_index) if s else 0,
            "dropped_ticks": self.dropped_ticks,
        }

    # ---- lifecycle ----
    async def load(self, storage: StorageProvider) -> PlaybackState:
        """
        Index a recording and make it current. On LoadError the previous
        recording stays loaded and untouched.
        """
        state = await asyncio.to_thread(catalog.load, storage)

        self._generation += 1
        self._release(self.frame)
        self.frame = None
        self.storage = storage
        self.assembler = FrameAssembler(storage, self.blobs)
        self.cursor.attach(state)
        log.info("[session] recording %s ready (%d frames)", state.name, state.frame_count)

        await self._assemble_current()
        return state

    def close(self):
        """Drop the recording and every outstanding image handle."""
        self._generation += 1
        self._release(self.frame)
        self.frame = None
        self.cursor.detach()
        self.storage = None
        self.assembler = None
        self.blobs.clear()

    # ---- cursor operations ----
    async def tick(self) -> Optional[CursorSignal]:
        """Timer callback: advance one frame while playing."""
        if not self.cursor.playing:
            return None
        if self._in_flight:
            self.dropped_ticks += 1
            return None
        sig = await self.step()
        if sig is CursorSignal.END_OF_RECORDING:
            self.cursor.pause()
            log.info("[session] end of recording, paused")
        return sig

    async def step(self) -> CursorSignal:
        sig = self.cursor.advance()
        if sig is CursorSignal.ADVANCED:
            self._generation += 1
            await self._assemble_current()
        return sig

    async def seek(self, ordinal: int) -> CursorSignal:
        sig = self.cursor.seek(ordinal)
        if sig is CursorSignal.SOUGHT:
            self._generation += 1
            await self._assemble_current()
        return sig

    async def refresh(self) -> Optional[AssembledFrame]:
        return await self._assemble_current()

    def play(self) -> CursorSignal:
        return self.cursor.play()

    def pause(self) -> CursorSignal:
        return self.cursor.pause()

    def toggle_play(self) -> CursorSignal:
        return self.cursor.toggle_play()

    # ---- assembly ----
    def _release(self, frame: Optional[AssembledFrame]):
        if frame is not None:
            self.blobs.revoke_all(frame.image_refs.handles())

    def _commit(self, frame: AssembledFrame):
        FrameAssembler.commit(self.cursor.state, frame)
        previous, self.frame = self.frame, frame
        self._release(previous)

    async def _assemble_current(self) -> Optional[AssembledFrame]:
        if self._in_flight:
            # the running assembly sees the new generation and redoes its work
            return None
        self._in_flight = True
        try:
            while self.cursor.loaded and self.assembler is not None:
                generation = self._generation
                state = self.cursor.state
                frame = await asyncio.to_thread(self.assembler.build, state, state.current_ordinal)
                if generation != self._generation:
                    self._release(frame)
                    continue
                self._commit(frame)
                return frame
            return None
        finally:
            self._in_flight = False
