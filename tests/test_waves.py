import math
from unittest.mock import patch

import pytest

from slisko import waves


def at(now):
    return patch("time.monotonic", return_value=now)


def test_sin_at_start_is_midpoint():
    with at(10.0):
        assert waves.sin(10.0, 3.0) == 0.5


def test_full_waves_satisfy_pythagoras():
    for now in (11.0, 12.5, 17.3):
        with at(now):
            s = waves.sin_full(10.0, 2.0)
            c = waves.cos_full(10.0, 2.0)
        assert s * s + c * c == pytest.approx(1.0)


def test_scaled_waves_stay_in_unit_range():
    for step in range(50):
        with at(100.0 + step * 0.37):
            assert 0.0 <= waves.sin(100.0, 1.3) <= 1.0
            assert 0.0 <= waves.cos(100.0, 1.3) <= 1.0


def test_scaled_matches_full_range():
    with at(13.0):
        assert waves.sin(10.0, 1.0) == pytest.approx((math.sin(3.0) + 1) / 2)
        assert waves.cos(10.0, 1.0) == pytest.approx((waves.cos_full(10.0, 1.0) + 1) / 2)


def test_triangle_repeats_every_period():
    with at(11.5):
        first = waves.triangle(10.0, 4.0, 1.0)
    with at(15.5):
        second = waves.triangle(10.0, 4.0, 1.0)
    assert first == pytest.approx(second)


def test_triangle_hits_zero_at_amplitude():
    with at(15.0):
        assert waves.triangle(10.0, 4.0, 1.0) == 0.0


def test_curly_triangle_relates_to_triangle():
    with at(12.5):
        t = waves.triangle(10.0, 4.0, 1.0)
        assert waves.curly_triangle(10.0, 4.0, 1.0, 1.0) == pytest.approx(t)
        assert waves.curly_triangle(10.0, 4.0, 1.0, 2.0) == pytest.approx(t * t)