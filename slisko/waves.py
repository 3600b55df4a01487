"""Time-driven waveforms.

``start`` is a reading of :func:`time.monotonic`; each function evaluates
its wave at the time elapsed since then.
"""

from __future__ import annotations

import math
import time


def _elapsed(start: float) -> float:
    return time.monotonic() - start


def sin_full(start: float, speed: float) -> float:
    """Sine of the elapsed time, in [-1, 1]."""
    return math.sin(speed * _elapsed(start))


def cos_full(start: float, speed: float) -> float:
    """Cosine of the elapsed time, in [-1, 1]."""
    return math.cos(speed * _elapsed(start))


def sin(start: float, speed: float) -> float:
    """Sine of the elapsed time, rescaled to [0, 1]."""
    return (math.sin(speed * _elapsed(start)) + 1) / 2


def cos(start: float, speed: float) -> float:
    """Cosine of the elapsed time, rescaled to [0, 1]."""
    return (math.cos(speed * _elapsed(start)) + 1) / 2


def triangle(start: float, period: float, amplitude: float) -> float:
    """A triangle-like wave repeating every ``period`` seconds."""
    return abs(math.fmod(_elapsed(start), period) - amplitude)


def curly_triangle(start: float, period: float, amplitude: float, curl: float) -> float:
    """The triangle wave raised to the power ``curl``."""
    return math.pow(abs(math.fmod(_elapsed(start), period) - amplitude), curl)