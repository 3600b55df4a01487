"""Fakers: sources of blinking activity that look like real network traffic."""

from __future__ import annotations

import math
import time
from abc import ABC, abstractmethod
from collections.abc import Sequence

from slisko.shaping import duty_cycle, random_float, random_int, square


def _ms(seconds: float) -> int:
    return int(round(seconds * 1000))


class Fake(ABC):
    """Anything that yields a brightness value each frame."""

    @abstractmethod
    def trig(self) -> float:
        """The current value, normally 0 or 1."""


class Blinker(Fake):
    """A square wave of fixed speed (radians per second)."""

    def __init__(self, speed: float) -> None:
        self.speed = speed
        self._start = time.monotonic()

    def trig(self) -> float:
        return square(math.sin(self.speed * (time.monotonic() - self._start)))


class Interval(Fake):
    """Passes a blinker through for ``blink_length`` seconds out of every ``interval``."""

    def __init__(self, interval: float, blink_length: float, blink: Blinker) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.interval = interval
        self.blink_length = blink_length
        self.blink = blink
        self._start = time.monotonic()

    def trig(self) -> float:
        if (time.monotonic() - self._start) % self.interval < self.blink_length:
            return self.blink.trig()
        return 0.0


class RandomBlinker(Fake):
    """A pulse whose speed is re-drawn at random intervals."""

    def __init__(
        self, min_speed: float, max_speed: float, min_time: float, max_time: float
    ) -> None:
        self.min_speed = min_speed
        self.max_speed = max_speed
        self.min_time = min_time
        self.max_time = max_time
        self._start = time.monotonic()
        self._interval = self._draw_duration()
        self._speed = random_float(min_speed, max_speed)

    @property
    def speed(self) -> float:
        return self._speed

    @property
    def interval(self) -> float:
        return self._interval

    def _draw_duration(self) -> float:
        return random_float(_ms(self.min_time), _ms(self.max_time)) / 1000

    def trig(self) -> float:
        if time.monotonic() - self._start > self._interval:
            self._interval = self._draw_duration()
            self._speed = random_float(self.min_speed, self.max_speed)
            self._start = time.monotonic()
        return duty_cycle(math.sin(self._speed * (time.monotonic() - self._start)), 0.80)


class RandomInterval(Fake):
    """Quiet for a random time, then passes ``blink`` through for a random time.

    Both durations are whole milliseconds drawn from half-open ranges, so each
    minimum must be below its maximum.
    """

    def __init__(
        self,
        min_interval: float,
        max_interval: float,
        min_blink: float,
        max_blink: float,
        blink: Fake,
    ) -> None:
        self.min_interval = min_interval
        self.max_interval = max_interval
        self.min_blink = min_blink
        self.max_blink = max_blink
        self.blink = blink
        self._start = time.monotonic()
        self._interval, self._blink_length = self._draw()

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def blink_length(self) -> float:
        return self._blink_length

    def _draw(self) -> tuple[float, float]:
        interval = random_int(_ms(self.min_interval), _ms(self.max_interval)) / 1000
        length = random_int(_ms(self.min_blink), _ms(self.max_blink)) / 1000
        return interval, length

    def trig(self) -> float:
        if time.monotonic() - self._start > self._interval + self._blink_length:
            self._interval, self._blink_length = self._draw()
            self._start = time.monotonic()
        if time.monotonic() - self._start > self._interval:
            return self.blink.trig()
        return 0.0


class SteppedBlinker(Fake):
    """A square-wave blinker over a list of speed steps.

    No step is ever selected, so the speed stays at zero and the output is
    constantly off.
    """

    def __init__(self, steps: Sequence[float], ref_time: float | None = None) -> None:
        self.steps = list(steps)
        self.ref_time = ref_time
        self.current_speed = 0.0
        self._start = time.monotonic()

    def trig(self) -> float:
        return square(math.sin(self.current_speed * (time.monotonic() - self._start)))