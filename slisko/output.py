"""Output pump: turns mapped pixels into RGB bytes and writes them to a device."""

from __future__ import annotations

import queue
from abc import ABC, abstractmethod
from collections.abc import Iterable

from slisko.pixel import Pixel, clamp255


class Device(ABC):
    """Something that accepts a stream of RGB bytes."""

    @abstractmethod
    def write(self, pixels: bytes) -> int:
        """Send the bytes; return how many were written."""

    @abstractmethod
    def close(self) -> None:
        """Release the device."""


class NullDevice(Device):
    """A device that sends nothing anywhere.

    It reports zero bytes written, but remembers the last frame it was
    given and whether it has been closed.
    """

    def __init__(self) -> None:
        self.last_frame: bytes = b""
        self.frames = 0
        self.closed = False

    def write(self, pixels: bytes) -> int:
        self.last_frame = bytes(pixels)
        self.frames += 1
        return 0

    def close(self) -> None:
        self.closed = True


class Output:
    """Maps pixels to an LED strip of ``num_pixels`` LEDs, three bytes each.

    A frame is written only when it differs from the last one written.
    """

    def __init__(
        self, num_pixels: int, device: Device, trigger: queue.Queue[bool | None]
    ) -> None:
        if num_pixels < 0:
            raise ValueError("num_pixels must not be negative")
        self.num_pixels = num_pixels
        self.device = device
        self.mapping: list[Pixel] = []
        self._trigger = trigger
        self._buffer = bytearray(num_pixels * 3)
        self._last = bytes(num_pixels * 3)

    def map(self, pixels: Iterable[Pixel]) -> None:
        """Append pixels, by reference, to the end of the strip."""
        added = list(pixels)
        if len(self.mapping) + len(added) > self.num_pixels:
            raise ValueError(
                f"mapping {len(self.mapping) + len(added)} pixels onto a strip of "
                f"{self.num_pixels}"
            )
        self.mapping.extend(added)

    def render(self) -> bool:
        """Fill the buffer from the mapping; write it if it changed.

        Returns whether anything was written.
        """
        for index, pixel in enumerate(self.mapping):
            offset = index * 3
            self._buffer[offset : offset + 3] = bytes(
                (clamp255(pixel.r * 255), clamp255(pixel.g * 255), clamp255(pixel.b * 255))
            )
        if self._buffer == self._last:
            return False
        self.device.write(bytes(self._buffer))
        self._last = bytes(self._buffer)
        return True

    def run(self) -> None:
        """Render once per trigger message until ``None`` arrives."""
        for _ in iter(self._trigger.get, None):
            self.render()

    def clear(self) -> None:
        """Write an all-black frame."""
        self._buffer[:] = bytes(len(self._buffer))
        self.device.write(bytes(self._buffer))

    def close(self) -> None:
        self.device.close()


def gen_empty(num: int) -> list[Pixel]:
    """``num`` fresh unlit pixels, for strip positions with no card LED."""
    return [Pixel() for _ in range(num)]