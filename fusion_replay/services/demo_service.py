"""
Synthetic sensor data for demo mode (no recording loaded).

Stateful: consecutive calls continue the same motion.
"""
from __future__ import annotations

import math
from typing import List, Optional

import numpy as np

from ..core import config as C
from ..models import DemoFrameResponse
from ..recording.models import BeamPowerSample, PositionSample, RangePoint
from .frame_service import beam_model, flatten_points, tag_model

# walls of the simulated room (x1, y1, x2, y2), meters
_WALLS = [
    (-4.0, -1.0, 3.0, -1.0),
    (-4.0, 10.0, 3.0, 10.0),
    (-4.0, -1.0, -4.0, 10.0),
    (3.0, -1.0, 3.0, 10.0),
]
_OBSTACLE_POINTS = 30


class DemoSampler:
    def __init__(self, seed: Optional[int] = C.DEMO_SEED):
        self.rng = np.random.default_rng(seed)
        self.tag_angle = 0.0
        self.time_step = 0

    def lidar_frame(self, count: int = C.DEMO_POINT_COUNT) -> List[RangePoint]:
        """Noisy wall outline plus a moving person-sized obstacle."""
        per_wall = max(1, (count - _OBSTACLE_POINTS) // len(_WALLS))
        points: List[RangePoint] = []
        t = np.arange(per_wall) / per_wall
        for (x1, y1, x2, y2) in _WALLS:
            xs = x1 + (x2 - x1) * t + self.rng.normal(0.0, 0.05, per_wall)
            ys = y1 + (y2 - y1) * t + self.rng.normal(0.0, 0.05, per_wall)
            intens = self.rng.random(per_wall)
            points.extend(RangePoint(float(x), float(y), float(i)) for x, y, i in zip(xs, ys, intens))

        ox = math.sin(self.time_step * 0.05) * 2 - 1
        oy = math.cos(self.time_step * 0.05) * 2 + 4
        ang = np.arange(_OBSTACLE_POINTS) / _OBSTACLE_POINTS * 2 * math.pi
        r = 0.3 + self.rng.random(_OBSTACLE_POINTS) * 0.05
        points.extend(
            RangePoint(float(ox + math.cos(a) * ri), float(oy + math.sin(a) * ri), 1.0)
            for a, ri in zip(ang, r)
        )
        return points

    def tag_frame(self) -> PositionSample:
        """Tag on a figure-8 with noisy ranges to each anchor."""
        self.tag_angle += 0.02
        a = self.tag_angle
        pos = np.array([
            math.sin(a) * 2 - 1,
            math.sin(a * 2) * 2 + 4.5,
            0.5 + math.sin(a * 5) * 0.1,
        ])
        anchors = np.array([[an["x"], an["y"], an["z"]] for an in C.UWB_ANCHORS])
        ranges = np.linalg.norm(anchors - pos, axis=1) + self.rng.normal(0.0, 0.05, len(anchors))
        return PositionSample(
            id="Tag1",
            position=(float(pos[0]), float(pos[1]), float(pos[2])),
            ranges=tuple(float(v) for v in ranges),
        )

    def beam_frame(self) -> BeamPowerSample:
        """Gaussian lobe sweeping across the beams, noise floor, clutter notch."""
        self.time_step += 1
        n = C.BEAM_COUNT
        target = int((math.sin(self.time_step * 0.05) * 0.5 + 0.5) * (n - 1))
        dist = np.abs(np.arange(n) - target)
        power = np.exp(-(dist * dist) / 20.0) + self.rng.random(n) * 0.1
        power[26:35] *= 0.5
        power = np.clip(power, 0.0, 1.0)
        return BeamPowerSample(power=tuple(power.tolist()), peak_index=target)


def get_demo_frame_service(sampler: DemoSampler, count: int = C.DEMO_POINT_COUNT) -> DemoFrameResponse:
    points = sampler.lidar_frame(count)
    xy, intensity = flatten_points(points)
    return DemoFrameResponse(
        count=len(points),
        points=xy,
        intensity=intensity,
        tag=tag_model(sampler.tag_frame()),
        beam=beam_model(sampler.beam_frame()),
    )
