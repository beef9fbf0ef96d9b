"""
Data classes for recording indexing and playback.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class ManifestFrame:
    """One primary-stream frame from index.json."""
    ordinal: int
    timestamp_ns: int
    stream_paths: Dict[str, str] = field(default_factory=dict)
    source_index: int = 0

    @property
    def timestamp_ms(self) -> float:
        """Frame time in fractional milliseconds."""
        return self.timestamp_ns / 1_000_000


@dataclass(frozen=True)
class TimestampedFileRef:
    """An auxiliary sample file; locator is its path relative to the root."""
    timestamp_ms: int
    locator: str


@dataclass(frozen=True)
class RangePoint:
    """A lidar return in the world frame (meters)."""
    x: float
    y: float
    intensity: float


@dataclass(frozen=True)
class PositionSample:
    """A UWB tag reading."""
    id: str
    position: Tuple[float, float, float]
    ranges: Tuple[float, ...] = ()

    @property
    def x(self) -> float:
        return self.position[0]

    @property
    def y(self) -> float:
        return self.position[1]

    @property
    def z(self) -> float:
        return self.position[2]


@dataclass(frozen=True)
class BeamPowerSample:
    """An mmWave beamforming power profile."""
    power: Tuple[float, ...]
    peak_index: int


@dataclass(frozen=True)
class ImageRefs:
    """Blob handles for the camera streams of one frame."""
    color: Optional[str] = None
    depth: Optional[str] = None

    def handles(self) -> List[str]:
        return [h for h in (self.color, self.depth) if h is not None]


@dataclass(frozen=True)
class AssembledFrame:
    """Everything a renderer needs for one playback position."""
    ordinal: int
    timestamp_ns: int
    image_refs: ImageRefs
    range_points: Tuple[RangePoint, ...]
    tag: Optional[PositionSample]
    beam: Optional[BeamPowerSample]
    source_index: int = 0


@dataclass
class PlaybackState:
    """A loaded recording and the playback position within it."""
    manifest: List[ManifestFrame]
    tag_index: List[TimestampedFileRef] = field(default_factory=list)
    beam_index: List[TimestampedFileRef] = field(default_factory=list)
    current_ordinal: int = 0
    retained_tag: Optional[PositionSample] = None
    retained_beam: Optional[BeamPowerSample] = None
    playing: bool = False
    name: str = ""

    @property
    def frame_count(self) -> int:
        return len(self.manifest)

    @property
    def last_ordinal(self) -> int:
        return len(self.manifest) - 1

    @property
    def current(self) -> ManifestFrame:
        return self.manifest[self.current_ordinal]
