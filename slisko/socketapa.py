"""Streams mapped pixels as binary websocket frames."""

from __future__ import annotations

import logging
import queue
from collections.abc import Iterable
from typing import Any

import websocket

from slisko.pixel import Pixel, clamp255

log = logging.getLogger(__name__)


class SocketApa:
    """Sends every frame of ``num_pixels`` RGB pixels to a websocket server at ``addr``.

    ``connection`` may be given to use an already open websocket; otherwise
    ``ws://<addr>/`` is dialled and connection errors propagate.
    """

    def __init__(
        self,
        addr: str,
        num_pixels: int,
        trigger: queue.Queue[bool | None],
        connection: Any = None,
    ) -> None:
        if num_pixels < 0:
            raise ValueError("num_pixels must not be negative")
        self.addr = addr
        self.num_pixels = num_pixels
        self.mapping: list[Pixel] = []
        self._trigger = trigger
        self._buffer = bytearray(num_pixels * 3)
        self._connection = (
            connection if connection is not None else websocket.create_connection(f"ws://{addr}/")
        )

    @property
    def frame(self) -> bytes:
        """The current output buffer."""
        return bytes(self._buffer)

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
        """Fill the buffer from the mapping and send it; return whether it was sent."""
        for index, pixel in enumerate(self.mapping):
            offset = index * 3
            self._buffer[offset : offset + 3] = bytes(
                (clamp255(pixel.r * 255), clamp255(pixel.g * 255), clamp255(pixel.b * 255))
            )
        try:
            self._connection.send_binary(bytes(self._buffer))
        except (websocket.WebSocketException, OSError) as exc:
            log.error("sending frame failed: %s", exc)
            return False
        return True

    def run(self) -> None:
        """Render once per trigger message until ``None`` arrives."""
        for _ in iter(self._trigger.get, None):
            self.render()

    def clear(self) -> None:
        """Zero the output buffer."""
        self._buffer[:] = bytes(len(self._buffer))

    def close(self) -> None:
        self._connection.close()