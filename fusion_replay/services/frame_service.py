from __future__ import annotations
from typing import Iterable, List, Optional, Tuple

from ..core.session import PlaybackSession
from ..models import BeamModel, FrameResponse, Point3, TagModel
from ..recording.models import BeamPowerSample, PositionSample, RangePoint

BLOB_ROUTE = "/api/v1/blobs"


def flatten_points(points: Iterable[RangePoint]) -> Tuple[List[float], List[float]]:
    xy: List[float] = []
    intensity: List[float] = []
    for p in points:
        xy.append(p.x); xy.append(p.y)
        intensity.append(p.intensity)
    return xy, intensity


def tag_model(tag: Optional[PositionSample]) -> Optional[TagModel]:
    if tag is None:
        return None
    return TagModel(id=tag.id, position=Point3(x=tag.x, y=tag.y, z=tag.z), ranges=list(tag.ranges))


def beam_model(beam: Optional[BeamPowerSample]) -> Optional[BeamModel]:
    if beam is None:
        return None
    return BeamModel(power=list(beam.power), peak_index=beam.peak_index)


def _blob_url(handle: Optional[str]) -> Optional[str]:
    return f"{BLOB_ROUTE}/{handle}" if handle else None


def get_frame_service(session: PlaybackSession) -> Optional[FrameResponse]:
    """The session's current frame, or None when nothing is loaded/assembled yet."""
    frame = session.frame
    state = session.state
    if frame is None or state is None:
        return None
    xy, intensity = flatten_points(frame.range_points)
    return FrameResponse(
        ordinal=frame.ordinal,
        source_index=frame.source_index,
        t_ns=frame.timestamp_ns,
        frame_count=state.frame_count,
        playing=state.playing,
        color_url=_blob_url(frame.image_refs.color),
        depth_url=_blob_url(frame.image_refs.depth),
        count=len(frame.range_points),
        points=xy,
        intensity=intensity,
        tag=tag_model(frame.tag),
        beam=beam_model(frame.beam),
    )
