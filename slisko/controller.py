"""The controller: keeps the set of active patterns and renders frames."""

from __future__ import annotations

import logging
import queue
import threading
import time
from dataclasses import dataclass
from typing import Any

from slisko.broker import Broker
from slisko.chassis import Chassis
from slisko.patterns import (
    A9K8TL,
    A9K40GE,
    SUP720,
    X6704,
    Blink48Ports,
    Colorcycler,
    GreenStatus,
    Mapper,
    Pattern,
    PatternInfo,
    RedStatus,
    RenderInfo,
    Snake,
    Static,
    Strobe,
)

log = logging.getLogger(__name__)

UPDATE_BUFFER = 20


def _default_patterns() -> dict[str, Pattern]:
    return {
        "blink48ports": Blink48Ports(),
        "greenstatus": GreenStatus(),
        "redstatus": RedStatus(),
        "strobe": Strobe(),
        "sup720": SUP720(),
        "x6704": X6704(),
        "colorcycler": Colorcycler(),
        "snake": Snake(),
        "mapper": Mapper(),
        "a9k-8t-l": A9K8TL(),
        "a9k-40ge-l": A9K40GE(),
        "static": Static(),
    }


@dataclass(frozen=True)
class PatternState:
    """A pattern's name, category and whether it is currently enabled."""

    pattern_name: str
    category: str
    enabled: bool

    def to_json(self) -> dict[str, Any]:
        return {
            "PatternName": self.pattern_name,
            "Category": self.category,
            "Enabled": self.enabled,
        }


class Controller:
    """Owns the patterns for one chassis and renders them at a fixed frame rate.

    Only one pattern per category may be active, except in the "misc"
    category. After each frame ``True`` is published on ``frame_broker``.
    Pattern-state changes are pushed to ``updates``; when that queue is full
    the oldest update is dropped.
    """

    def __init__(self, chassis: Chassis) -> None:
        self.chassis = chassis
        self._patterns = _default_patterns()
        for pattern in self._patterns.values():
            pattern.bootstrap(chassis)

        self.start_time = time.monotonic()
        self.framerate = 0
        self.frame = 0
        self.updates: queue.Queue[dict[str, list[PatternState]]] = queue.Queue(
            maxsize=UPDATE_BUFFER
        )
        self.frame_broker = Broker()

        self._active: list[Pattern] = []
        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    def start(self, framerate: int) -> None:
        """Start rendering ``framerate`` frames per second in the background."""
        if framerate <= 0:
            raise ValueError("framerate must be positive")
        interval_ms = 1000 // framerate
        if interval_ms == 0:
            raise ValueError("framerate must be at most 1000")
        if self._thread is not None and self._thread.is_alive():
            raise RuntimeError("controller is already running")
        self.framerate = framerate
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._render_loop,
            args=(interval_ms / 1000,),
            name="renderer",
            daemon=True,
        )
        self._thread.start()
        if not self.frame_broker.running:
            self.frame_broker.start()

    def stop(self) -> None:
        """Stop rendering and reset the frame counter."""
        if self._thread is None:
            raise RuntimeError("controller was never started")
        self._stop_event.set()
        self._thread.join()
        self._thread = None
        self.frame = 0

    def list_patterns(self) -> list[PatternInfo]:
        return [pattern.info() for pattern in self._patterns.values()]

    def patterns_per_category(self) -> dict[str, list[PatternState]]:
        """Every pattern grouped by category, with its enabled state."""
        grouped: dict[str, list[PatternState]] = {}
        for pattern in self._patterns.values():
            info = pattern.info()
            grouped.setdefault(info.category, []).append(
                PatternState(info.name, info.category, self.is_active(info.name))
            )
        return grouped

    def pattern_exists(self, name: str) -> bool:
        return name in self._patterns

    def enable_pattern(self, name: str) -> None:
        """Activate a pattern, replacing any active one of the same category.

        Does nothing if it is already active. Unknown names are ignored, but
        still publish an update.
        """
        with self._lock:
            if any(p.info().name == name for p in self._active):
                return
            pattern = self._patterns.get(name)
            if pattern is not None:
                category = pattern.info().category
                if category != "misc":
                    self._active = [
                        a for a in self._active if a.info().category != category
                    ]
                self._active.append(pattern)
                log.info("Activated pattern: %s", pattern.info().name)
        self._push_update(self.patterns_per_category())

    def disable_pattern(self, name: str) -> None:
        """Deactivate a pattern and blank every LED.

        An update is published only when no active pattern has that name.
        """
        with self._lock:
            for index, pattern in enumerate(self._active):
                if pattern.info().name == name:
                    del self._active[index]
                    for led in self.chassis.leds:
                        led.set_color(0.0, 0.0, 0.0)
                    log.info("Disabled pattern: %s", name)
                    return
        self._push_update(self.patterns_per_category())

    def is_active(self, name: str) -> bool:
        with self._lock:
            return any(p.info().name == name for p in self._active)

    def render_frame(self) -> None:
        """Render one frame: global patterns first, then every active pattern."""
        with self._lock:
            active = list(self._active)
        info = RenderInfo(start=self.start_time, frame=self.frame)
        for pattern in active:
            if pattern.info().category == "global":
                pattern.render(info, self.chassis)
        for pattern in active:
            pattern.render(info, self.chassis)
        self.frame_broker.publish(True)
        self.frame += 1

    def _render_loop(self, interval: float) -> None:
        while not self._stop_event.wait(interval):
            self.render_frame()

    def _push_update(self, update: dict[str, list[PatternState]]) -> None:
        while True:
            try:
                self.updates.put_nowait(update)
                return
            except queue.Full:
                try:
                    self.updates.get_nowait()
                except queue.Empty:
                    pass