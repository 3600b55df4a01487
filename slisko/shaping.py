"""Small value-shaping helpers used by patterns and fakers."""

from __future__ import annotations

import random


def crush(v: float, threshold: float) -> float:
    """Return 1 when ``v`` exceeds ``threshold``, otherwise ``v``."""
    return 1.0 if v > threshold else v


def threshold(v: float, level: float) -> float:
    """Return ``v`` when it exceeds ``level``, otherwise 0."""
    return v if v > level else 0.0


def trigger(v: float, enabled: bool) -> float:
    """Return ``v`` when ``enabled``, otherwise 0."""
    return v if enabled else 0.0


def random_float(low: float, high: float) -> float:
    """A uniformly random float in [low, high)."""
    return low + random.random() * (high - low)


def random_int(low: int, high: int) -> int:
    """A uniformly random integer in [low, high).

    Raises ValueError when the range is empty.
    """
    if high <= low:
        raise ValueError(f"empty range: [{low}, {high})")
    return random.randrange(low, high)


def square(v: float) -> float:
    """1 for positive values, 0 otherwise."""
    return float(v > 0.0)


def duty_cycle(v: float, length: float) -> float:
    """Turn a sine value into a pulse that is off for ``length`` of its cycle."""
    cutoff = length * 2 - 1
    return float(v > cutoff)


def invert(v: float) -> float:
    """Return ``1 - v``."""
    return 1 - v