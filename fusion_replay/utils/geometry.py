"""
Polar -> cartesian conversion and world (meters) -> pixel scaling.

Everything here is pure: identical float inputs give identical outputs.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np

from ..core import config as C


def polar_to_cartesian(angle_deg: float, range_m: float) -> Tuple[float, float]:
    """(angle in degrees, range in meters) -> (x, y) in meters."""
    rad = math.radians(angle_deg)
    return range_m * math.cos(rad), range_m * math.sin(rad)


def world_to_view_scale(view_width_m: float, view_height_m: float,
                        available_px_width: float, available_px_height: float) -> float:
    """
    Pixels per meter that fits the whole world window into the drawing area
    with the same scale on both axes.
    """
    if view_width_m <= 0 or view_height_m <= 0:
        raise ValueError("view window must have positive width and height")
    ppm = min(available_px_width / view_width_m, available_px_height / view_height_m)
    return max(ppm, 0.0)


@dataclass(frozen=True)
class ViewFit:
    """Where the world window lands in the container, in pixels."""
    ppm: float
    drawing_width: float
    drawing_height: float
    offset_x: float
    offset_y: float


def fit_view(view_width_m: float, view_height_m: float,
             container_px_width: float, container_px_height: float,
             margin_px: float = 0.0) -> ViewFit:
    """Uniform scale plus centring; the spare margin on the long axis is split evenly."""
    available_w = container_px_width - 2 * margin_px
    available_h = container_px_height - 2 * margin_px
    ppm = world_to_view_scale(view_width_m, view_height_m, available_w, available_h)
    dw = view_width_m * ppm
    dh = view_height_m * ppm
    return ViewFit(
        ppm=ppm,
        drawing_width=dw,
        drawing_height=dh,
        offset_x=margin_px + (available_w - dw) / 2,
        offset_y=margin_px + (available_h - dh) / 2,
    )


def tick_step(start: float, stop: float, count: int) -> float:
    """Round 1/2/5 x 10^k step giving roughly `count` ticks over [start, stop]."""
    span = abs(stop - start)
    if count <= 0 or span == 0:
        return 0.0
    step0 = span / count
    step1 = 10 ** math.floor(math.log10(step0))
    error = step0 / step1
    if error >= math.sqrt(50):
        step1 *= 10
    elif error >= math.sqrt(10):
        step1 *= 5
    elif error >= math.sqrt(2):
        step1 *= 2
    return step1


@dataclass(frozen=True)
class AxisScale:
    """Linear map from a domain interval (meters) to a range interval (pixels)."""
    domain_min: float
    domain_max: float
    range_start: float
    range_end: float

    def __call__(self, v: float) -> float:
        d = self.domain_max - self.domain_min
        if d == 0:
            return (self.range_start + self.range_end) / 2
        return self.range_start + (v - self.domain_min) * (self.range_end - self.range_start) / d

    def invert(self, px: float) -> float:
        """Pixel -> world."""
        r = self.range_end - self.range_start
        if r == 0:
            return (self.domain_min + self.domain_max) / 2
        return self.domain_min + (px - self.range_start) * (self.domain_max - self.domain_min) / r

    def map_array(self, values: Sequence[float]) -> np.ndarray:
        arr = np.asarray(values, dtype=float)
        d = self.domain_max - self.domain_min
        if d == 0:
            return np.full(arr.shape, (self.range_start + self.range_end) / 2)
        return self.range_start + (arr - self.domain_min) * (self.range_end - self.range_start) / d

    def ticks(self, count: int = C.VIEW_TICKS) -> List[float]:
        lo, hi = sorted((self.domain_min, self.domain_max))
        step = tick_step(lo, hi, count)
        if step == 0:
            return [lo] if lo == hi else []
        i0 = math.ceil(lo / step)
        i1 = math.floor(hi / step)
        # avoid 0.30000000000000004-style ticks
        return [round(float(i * step), 10) for i in range(i0, i1 + 1)]


def axis_scale(domain_min: float, domain_max: float,
               range_px_start: float, range_px_end: float) -> AxisScale:
    return AxisScale(domain_min, domain_max, range_px_start, range_px_end)


@dataclass(frozen=True)
class ViewLayout:
    """
    The shared 2D map: a fixed world window scaled 1:1 into a pixel container.
    y is flipped so that world "up" is screen "up".
    """
    fit: ViewFit
    x_scale: AxisScale
    y_scale: AxisScale

    @classmethod
    def build(cls, container_px_width: float, container_px_height: float,
              margin_px: float = C.VIEW_MARGIN_PX,
              view_width_m: float = C.VIEW_WIDTH_M,
              y_min: float = C.VIEW_Y_MIN, y_max: float = C.VIEW_Y_MAX) -> "ViewLayout":
        view_height_m = y_max - y_min
        fit = fit_view(view_width_m, view_height_m, container_px_width, container_px_height, margin_px)
        x_scale = axis_scale(-view_width_m / 2, view_width_m / 2,
                             fit.offset_x, fit.offset_x + fit.drawing_width)
        y_scale = axis_scale(y_min, y_max,
                             fit.offset_y + fit.drawing_height, fit.offset_y)
        return cls(fit=fit, x_scale=x_scale, y_scale=y_scale)

    def to_px(self, x: float, y: float) -> Tuple[float, float]:
        return self.x_scale(x), self.y_scale(y)

    def to_world(self, px: float, py: float) -> Tuple[float, float]:
        return self.x_scale.invert(px), self.y_scale.invert(py)
