"""
Unit tests for polar conversion and view scaling
"""
import math
import random

import pytest

from fusion_replay.utils.geometry import (
    AxisScale,
    ViewLayout,
    axis_scale,
    fit_view,
    polar_to_cartesian,
    tick_step,
    world_to_view_scale,
)


class TestPolar:
    @pytest.mark.parametrize("angle,rng,expected", [
        (0, 1.0, (1.0, 0.0)),
        (90, 1.0, (0.0, 1.0)),
        (180, 2.0, (-2.0, 0.0)),
        (-90, 3.0, (0.0, -3.0)),
        (45, math.sqrt(2), (1.0, 1.0)),
    ])
    def test_known_points(self, angle, rng, expected):
        assert polar_to_cartesian(angle, rng) == pytest.approx(expected, abs=1e-12)

    def test_preserves_range(self):
        r = random.Random(1)
        for _ in range(100):
            a, d = r.uniform(-360, 360), r.uniform(0, 30)
            x, y = polar_to_cartesian(a, d)
            assert math.hypot(x, y) == pytest.approx(d)

    def test_bit_reproducible(self):
        r = random.Random(7)
        inputs = [(r.uniform(-720, 720), r.uniform(0, 50)) for _ in range(200)]
        assert [polar_to_cartesian(a, d) for a, d in inputs] == [polar_to_cartesian(a, d) for a, d in inputs]


class TestScale:
    def test_wide_container(self):
        ppm = world_to_view_scale(12, 12, 1000, 500)
        assert ppm == pytest.approx(500 / 12)
        assert round(ppm, 2) == 41.67

    def test_tall_container(self):
        assert world_to_view_scale(12, 6, 300, 900) == pytest.approx(25.0)

    def test_degenerate(self):
        assert world_to_view_scale(12, 12, -10, 100) == 0.0
        with pytest.raises(ValueError):
            world_to_view_scale(0, 12, 100, 100)

    def test_fit_centres_long_axis(self):
        fit = fit_view(12, 12, 1000, 500)
        assert fit.drawing_width == pytest.approx(500)
        assert fit.drawing_height == pytest.approx(500)
        assert fit.offset_x == pytest.approx(250)
        assert fit.offset_y == pytest.approx(0)

    def test_fit_with_margin(self):
        fit = fit_view(12, 12, 1040, 540, margin_px=20)
        assert fit.ppm == pytest.approx(500 / 12)
        assert fit.offset_x == pytest.approx(20 + 250)
        assert fit.offset_y == pytest.approx(20)


class TestAxisScale:
    def test_maps_and_inverts(self):
        s = axis_scale(-6, 6, 100, 700)
        assert s(-6) == 100 and s(6) == 700 and s(0) == 400
        for px in (100.0, 250.5, 400.0, 699.0):
            assert s(s.invert(px)) == pytest.approx(px)
        assert s.invert(400) == pytest.approx(0)

    def test_reversed_range(self):
        s = AxisScale(-2, 10, 500, 0)
        assert s(-2) == 500 and s(10) == 0
        assert s.invert(250) == pytest.approx(4)

    def test_degenerate_intervals(self):
        assert AxisScale(1, 1, 0, 10)(5) == 5
        assert AxisScale(0, 10, 3, 3).invert(3) == 5

    def test_map_array_matches_scalar(self):
        s = axis_scale(-6, 6, 20, 520)
        vals = [-6.0, -1.5, 0.0, 2.25, 6.0]
        assert list(s.map_array(vals)) == pytest.approx([s(v) for v in vals])

    def test_ticks(self):
        assert axis_scale(-6, 6, 0, 1).ticks(10) == [float(v) for v in range(-6, 7)]
        assert axis_scale(-2, 10, 1, 0).ticks(10) == [float(v) for v in range(-2, 11)]
        assert axis_scale(0, 1, 0, 1).ticks(5) == [0.0, 0.2, 0.4, 0.6, 0.8, 1.0]
        assert axis_scale(0, 100, 0, 1).ticks(4) == [0.0, 20.0, 40.0, 60.0, 80.0, 100.0]

    def test_tick_step(self):
        assert tick_step(0, 10, 10) == 1
        assert tick_step(0, 10, 0) == 0.0
        assert tick_step(5, 5, 10) == 0.0


class TestViewLayout:
    def test_world_window_corners(self):
        layout = ViewLayout.build(1040, 540, margin_px=20)
        # x in [-6, 6], y in [-2, 10], y flipped
        assert layout.to_px(-6, 10) == pytest.approx((270, 20))
        assert layout.to_px(6, -2) == pytest.approx((770, 520))
        assert layout.to_world(520, 270) == pytest.approx((0, 4))

    def test_uniform_scale(self):
        layout = ViewLayout.build(800, 300, margin_px=0)
        x0, y0 = layout.to_px(0, 0)
        x1, y1 = layout.to_px(1, 1)
        assert (x1 - x0) == pytest.approx(layout.fit.ppm)
        assert (y0 - y1) == pytest.approx(layout.fit.ppm)
