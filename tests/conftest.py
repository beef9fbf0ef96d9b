"""
Shared fixtures: build small recordings in memory or on disk.
"""
import json
import os
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

import pytest

from fusion_replay.core import config as C
from fusion_replay.recording.storage import MemoryStorage

BASE_DT = datetime(2025, 11, 22, 3, 41, 37)
BASE_MS = int(round(BASE_DT.timestamp() * 1000))

LIDAR_HEADER = "angle_deg,range_m,intensity,valid"
TAG_HEADER = "ts,tag_id,seq,status,d0,d1,d2,d3,quality,x,y,z"


def stamp_name(prefix: str, t_ms: int) -> str:
    """'<prefix>YYYYMMDD_HHMMSS_mmm.csv' for a local-time epoch ms."""
    dt = datetime.fromtimestamp(t_ms / 1000.0)
    return f"{prefix}{dt:%Y%m%d_%H%M%S}_{dt.microsecond // 1000:03d}.csv"


def tag_row(x, y, z, ranges=(1.0, 2.0, 3.0, 4.0), tag_id="1") -> str:
    d = list(ranges) + [""] * (4 - len(ranges))
    return ",".join(str(v) for v in ["0", tag_id, "0", "ok", *d, "100", x, y, z])


class RecordingBuilder:
    def __init__(self):
        self.files: Dict[str, Union[str, bytes]] = {}
        self.frames: List[dict] = []

    def frame(self, t_ms: int, color: bool = True, depth: bool = False,
              lidar: Optional[Sequence[Tuple[float, float, float, float]]] = None,
              idx: Optional[int] = None) -> "RecordingBuilder":
        n = len(self.frames)
        streams = {}
        if color:
            streams[C.STREAM_COLOR] = f"color/{n:05d}.jpg"
            self.files[streams[C.STREAM_COLOR]] = b"\xff\xd8color" + bytes([n % 256])
        if depth:
            streams[C.STREAM_DEPTH] = f"depth/{n:05d}.png"
            self.files[streams[C.STREAM_DEPTH]] = b"\x89PNGdepth" + bytes([n % 256])
        if lidar is not None:
            streams[C.STREAM_LIDAR] = f"lidar/{n:05d}.csv"
            rows = [LIDAR_HEADER] + [",".join(str(v) for v in r) for r in lidar]
            self.files[streams[C.STREAM_LIDAR]] = "\n".join(rows) + "\n"
        self.frames.append({"idx": n if idx is None else idx, "t_ns": t_ms * 1_000_000, "streams": streams})
        return self

    def frames_at(self, times_ms: Iterable[int], **kw) -> "RecordingBuilder":
        for t in times_ms:
            self.frame(t, **kw)
        return self

    def tag(self, t_ms: int, x=1.0, y=2.0, z=0.5, ranges=(1.0, 2.0, 3.0, 4.0),
            tag_id="1", subdir: str = C.TAG_SUBDIR, body: Optional[str] = None) -> "RecordingBuilder":
        name = stamp_name(C.TAG_PREFIX, t_ms)
        path = f"{subdir}/{name}" if subdir else name
        self.files[path] = body if body is not None else f"{TAG_HEADER}\n{tag_row(x, y, z, ranges, tag_id)}\n"
        return self

    def beam(self, t_ms: int, power: Optional[Sequence[float]] = None,
             subdir: str = C.BEAM_SUBDIR, body: Optional[str] = None) -> "RecordingBuilder":
        name = stamp_name(C.BEAM_PREFIX, t_ms)
        path = f"{subdir}/{name}" if subdir else name
        if body is None:
            power = power if power is not None else [0.1] * C.BEAM_COUNT
            body = ",".join(str(v) for v in power) + "\n"
        self.files[path] = body
        return self

    def manifest(self) -> str:
        return json.dumps({"version": 1, "frames": self.frames})

    def storage(self, name: str = "rec") -> MemoryStorage:
        files = dict(self.files)
        files[C.INDEX_FILENAME] = self.manifest()
        return MemoryStorage(files, name=name)

    def write(self, root) -> str:
        root = str(root)
        files = dict(self.files)
        files[C.INDEX_FILENAME] = self.manifest()
        for rel, data in files.items():
            full = os.path.join(root, *rel.split("/"))
            os.makedirs(os.path.dirname(full), exist_ok=True)
            with open(full, "wb") as f:
                f.write(data.encode("utf-8") if isinstance(data, str) else data)
        return root


def peaked(index: int, value: float = 0.9, floor: float = 0.1) -> List[float]:
    power = [floor] * C.BEAM_COUNT
    power[index] = value
    return power


@pytest.fixture
def builder():
    return RecordingBuilder()


@pytest.fixture
def ten_frames(builder):
    """10 frames, 100 ms apart, one lidar hit each; tag at frame 2, beam at frame 0."""
    times = [BASE_MS + i * 100 for i in range(10)]
    builder.frames_at(times, depth=True, lidar=[(0, 1.0, 255, 1)])
    builder.tag(times[2], x=1.5, y=2.5, z=0.7)
    builder.beam(times[0], peaked(3))
    return builder
