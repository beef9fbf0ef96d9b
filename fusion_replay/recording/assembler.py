"""
Frame assembly: turns one manifest position into an AssembledFrame.

Per-field failures (missing file, bad row, bad column) never escape; the
field is reported absent, or for UWB / mmWave the last good sample is kept.
"""
from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence, Tuple

import numpy as np

from ..core import config as C
from ..utils.geometry import polar_to_cartesian
from .blobs import BlobRegistry, guess_media_type
from .indexer import resolve
from .models import (
    AssembledFrame,
    BeamPowerSample,
    ImageRefs,
    ManifestFrame,
    PlaybackState,
    PositionSample,
    RangePoint,
)
from .storage import StorageProvider

log = logging.getLogger(__name__)


def _finite(s: str) -> float:
    v = float(s)
    if not math.isfinite(v):
        raise ValueError(f"not a finite number: {s!r}")
    return v


def parse_lidar_csv(text: str) -> List[RangePoint]:
    """
    Rows 'angle_deg,range_m,intensity_raw,valid_flag' after a header row.
    Invalid or near-zero returns are dropped; angles are rotated +90 deg so
    the sensor's forward axis points world-up.
    """
    points: List[RangePoint] = []
    for line in text.splitlines()[1:]:
        if not line.strip():
            continue
        cols = line.split(",")
        if len(cols) < 4:
            continue
        try:
            angle, rng = _finite(cols[0]), _finite(cols[1])
            intensity, valid = float(cols[2]), float(cols[3])
        except ValueError:
            continue
        # NaN valid flag fails the comparison
        if not (valid > C.LIDAR_VALID_THRESHOLD and rng > C.LIDAR_MIN_RANGE_M):
            continue
        x, y = polar_to_cartesian(angle + C.LIDAR_ROTATION_DEG, rng)
        points.append(RangePoint(x=x, y=y, intensity=intensity / C.INTENSITY_SCALE))
    return points


def parse_tag_csv(text: str) -> Optional[PositionSample]:
    """First data row of a UWB file -> PositionSample, or None if it does not parse."""
    lines = text.splitlines()
    if len(lines) < 2:
        return None
    row = lines[1].split(",")
    try:
        x, y, z = (_finite(row[i]) for i in C.TAG_POS_COLS)
    except (IndexError, ValueError):
        return None

    ranges = []
    for i in C.TAG_RANGE_COLS:
        if i >= len(row):
            break
        try:
            ranges.append(_finite(row[i]))
        except ValueError:
            ranges.append(0.0)

    tag_id = row[C.TAG_ID_COL].strip() if len(row) > C.TAG_ID_COL else ""
    return PositionSample(id="Tag" + (tag_id or "0"), position=(x, y, z), ranges=tuple(ranges))


def parse_beam_csv(text: str, beam_count: int = C.BEAM_COUNT) -> Optional[BeamPowerSample]:
    """A single comma-separated row of >= beam_count powers -> BeamPowerSample."""
    values = [v.strip() for v in text.strip().split(",")]
    if len(values) < beam_count:
        return None
    try:
        power = np.array([float(v) for v in values[:beam_count]], dtype=float)
    except ValueError:
        return None
    if not np.all(np.isfinite(power)):
        return None
    # argmax returns the first occurrence on ties
    return BeamPowerSample(power=tuple(power.tolist()), peak_index=int(np.argmax(power)))


class FrameAssembler:
    """Reads one frame's artifacts through a StorageProvider."""

    def __init__(self, storage: StorageProvider, blobs: Optional[BlobRegistry] = None,
                 tolerance_ms: int = C.MATCH_TOLERANCE_MS):
        self.storage = storage
        self.blobs = blobs if blobs is not None else BlobRegistry()
        self.tolerance_ms = tolerance_ms

    # ---- per-stream readers ----
    def _read_bytes(self, path: str) -> Optional[bytes]:
        try:
            return self.storage.read_bytes(path)
        except OSError as e:
            log.debug("[assemble] cannot read %s: %s", path, e)
            return None

    def _read_text(self, path: str) -> Optional[str]:
        try:
            return self.storage.read_text(path)
        except OSError as e:
            log.debug("[assemble] cannot read %s: %s", path, e)
            return None

    def _image(self, frame: ManifestFrame, stream: str) -> Optional[str]:
        path = frame.stream_paths.get(stream)
        if not path:
            return None
        data = self._read_bytes(path)
        if data is None:
            log.debug("[assemble] frame %d: %s missing (%s)", frame.ordinal, stream, path)
            return None
        return self.blobs.create(data, guess_media_type(path))

    def _range_points(self, frame: ManifestFrame) -> Tuple[RangePoint, ...]:
        path = frame.stream_paths.get(C.STREAM_LIDAR)
        if not path:
            return ()
        text = self._read_text(path)
        if text is None:
            log.debug("[assemble] frame %d: lidar missing (%s)", frame.ordinal, path)
            return ()
        return tuple(parse_lidar_csv(text))

    def _tag(self, index: Sequence, t_ms: float,
             retained: Optional[PositionSample]) -> Optional[PositionSample]:
        ref = resolve(index, t_ms, self.tolerance_ms)
        if ref is None:
            return retained
        text = self._read_text(ref.locator)
        sample = parse_tag_csv(text) if text is not None else None
        if sample is None:
            log.debug("[assemble] unreadable uwb file %s, keeping last tag", ref.locator)
            return retained
        return sample

    def _beam(self, index: Sequence, t_ms: float,
              retained: Optional[BeamPowerSample]) -> Optional[BeamPowerSample]:
        ref = resolve(index, t_ms, self.tolerance_ms)
        if ref is None:
            return retained
        text = self._read_text(ref.locator)
        sample = parse_beam_csv(text) if text is not None else None
        if sample is None:
            log.debug("[assemble] unreadable mmwave file %s, keeping last beam", ref.locator)
            return retained
        return sample

    # ---- assembly ----
    def build(self, state: PlaybackState, ordinal: int) -> AssembledFrame:
        """
        Assemble `ordinal` without touching `state`. The frame's tag/beam are
        the fresh match when there is one, else the state's retained sample.
        """
        frame = state.manifest[ordinal]
        t_ms = frame.timestamp_ms

        refs = ImageRefs(
            color=self._image(frame, C.STREAM_COLOR),
            depth=self._image(frame, C.STREAM_DEPTH),
        )
        return AssembledFrame(
            ordinal=frame.ordinal,
            timestamp_ns=frame.timestamp_ns,
            image_refs=refs,
            range_points=self._range_points(frame),
            tag=self._tag(state.tag_index, t_ms, state.retained_tag),
            beam=self._beam(state.beam_index, t_ms, state.retained_beam),
            source_index=frame.source_index,
        )

    @staticmethod
    def commit(state: PlaybackState, frame: AssembledFrame):
        """Carry the frame's tag/beam forward as the retained samples."""
        state.retained_tag = frame.tag
        state.retained_beam = frame.beam

    def assemble(self, state: PlaybackState, ordinal: int) -> AssembledFrame:
        """build() + commit(): the synchronous path."""
        out = self.build(state, ordinal)
        self.commit(state, out)
        return out

    def release(self, frame: Optional[AssembledFrame]) -> int:
        """Revoke the frame's image handles."""
        if frame is None:
            return 0
        return self.blobs.revoke_all(frame.image_refs.handles())
