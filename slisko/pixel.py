"""Pixels: one RGB LED with a colour in [0, 1] per channel and a place on a card."""

from __future__ import annotations

import math
from dataclasses import dataclass, field


@dataclass
class Position:
    """Where an LED sits on its card image, and how large it is drawn."""

    x: float = 0.0
    y: float = 0.0
    size: float = 0.0


@dataclass(eq=False)
class Pixel:
    """A single LED.

    Pixels are shared by reference between cards, the chassis and outputs,
    so equality and hashing are by identity.
    """

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0
    position: Position = field(default_factory=Position)

    def set_color(self, r: float, g: float, b: float) -> None:
        """Set the colour as given, without clamping."""
        self.r, self.g, self.b = r, g, b

    def set_clamped(self, r: float, g: float, b: float) -> None:
        """Set the colour with each channel clamped to [0, 1]."""
        self.r, self.g, self.b = clamp01(r), clamp01(g), clamp01(b)

    def set_position(self, x: float, y: float, size: float) -> None:
        """Place the LED on its card."""
        self.position = Position(x, y, size)

    @property
    def rgb(self) -> tuple[float, float, float]:
        return (self.r, self.g, self.b)


def clamp01(v: float) -> float:
    """Clamp a value to the range [0, 1]."""
    if v < 0.0:
        return 0.0
    if v > 1.0:
        return 1.0
    return v


def clamp255(v: float) -> int:
    """Clamp a value to [0, 255] and truncate it to a byte."""
    if math.isnan(v) or v < 0:
        return 0
    if v > 255:
        return 255
    return int(v)