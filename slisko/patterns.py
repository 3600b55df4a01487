"""Light patterns that paint the LEDs of a chassis each frame."""

from __future__ import annotations

import colorsys
import math
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from slisko import waves
from slisko.chassis import Chassis
from slisko.faker import Fake, RandomBlinker, RandomInterval
from slisko.pixel import Pixel
from slisko.shaping import invert, square


@dataclass(frozen=True)
class PatternInfo:
    """A pattern's name and the category it belongs to."""

    name: str
    category: str


@dataclass(frozen=True)
class RenderInfo:
    """Per-frame data: the controller's start time (monotonic) and frame number."""

    start: float
    frame: int = 0


class Pattern(ABC):
    """Something that paints chassis LEDs once per frame."""

    @abstractmethod
    def render(self, info: RenderInfo, chassis: Chassis) -> None:
        """Paint one frame."""

    @abstractmethod
    def info(self) -> PatternInfo:
        """Describe the pattern."""

    @abstractmethod
    def bootstrap(self, chassis: Chassis) -> None:
        """Prepare per-chassis state before the first frame."""


def _traffic_faker() -> RandomInterval:
    return RandomInterval(0.1, 7.0, 0.1, 12.0, RandomBlinker(15, 40, 1.0, 10.0))


@dataclass
class _Port:
    faker: Fake
    port: Pixel
    fast: bool = True


class _LinkTraffic(Pattern):
    """Green traffic blinking on every link LED of one card model."""

    def __init__(self) -> None:
        self._ports: list[_Port] = []

    def _attach(self, chassis: Chassis, card_type: str) -> None:
        self._ports = [
            _Port(_traffic_faker(), pixel)
            for card in chassis.cards_of_type(card_type)
            for pixel in card.link
        ]

    def _paint(self) -> None:
        for port in self._ports:
            v = invert(port.faker.trig())
            port.port.set_clamped(v * 0.3, v * 1.0, v * 0.0)


class A9K40GE(_LinkTraffic):
    def render(self, info: RenderInfo, chassis: Chassis) -> None:
        self._paint()

    def info(self) -> PatternInfo:
        return PatternInfo("a9k-40ge-l", "misc")

    def bootstrap(self, chassis: Chassis) -> None:
        self._attach(chassis, "A9K-40GE-L")


class A9K8TL(_LinkTraffic):
    def render(self, info: RenderInfo, chassis: Chassis) -> None:
        self._paint()

    def info(self) -> PatternInfo:
        return PatternInfo("a9k-8t-l", "misc")

    def bootstrap(self, chassis: Chassis) -> None:
        self._attach(chassis, "A9K-8T-L")


class X6704(_LinkTraffic):
    def render(self, info: RenderInfo, chassis: Chassis) -> None:
        self._paint()

    def info(self) -> PatternInfo:
        return PatternInfo("x6704", "misc")

    def bootstrap(self, chassis: Chassis) -> None:
        self._attach(chassis, "6704")


class Blink48Ports(Pattern):
    """Traffic on 6478 ports: mostly gigabit green, about one in five amber."""

    def __init__(self) -> None:
        self._ports: list[_Port] = []

    def render(self, info: RenderInfo, chassis: Chassis) -> None:
        for port in self._ports:
            v = invert(port.faker.trig())
            if port.fast:
                port.port.set_clamped(v * 0.3, v * 1.0, v * 0.0)
            else:
                port.port.set_clamped(v * 1.0, v * 0.5, v * 0.0)

    def info(self) -> PatternInfo:
        return PatternInfo("blink48ports", "link")

    def bootstrap(self, chassis: Chassis) -> None:
        self._ports = [
            _Port(_traffic_faker(), pixel, fast=random.randrange(100) <= 80)
            for card in chassis.cards_of_type("6478")
            for pixel in card.link
        ]


@dataclass
class Colorcycler(Pattern):
    """Every LED slowly cycles through the hue wheel."""

    color: tuple[float, float, float] = field(default=(0.0, 0.0, 0.0))

    def render(self, info: RenderInfo, chassis: Chassis) -> None:
        hue = waves.sin(info.start, 0.2) * 360
        self.color = colorsys.hsv_to_rgb((hue / 360) % 1.0, 1.0, 1.0)
        for pixel in chassis.leds:
            pixel.set_clamped(*self.color)

    def info(self) -> PatternInfo:
        return PatternInfo("colorcycler", "global")

    def bootstrap(self, chassis: Chassis) -> None:
        self.color = (0.313725, 0.478431, 0.721569)


class Mapper(Pattern):
    """Lights the status LED green on a fixed set of cards, to check the wiring."""

    _CARDS = (
        ("6478", 0),
        ("6704", 0),
        ("6704", 1),
        ("sup720", 0),
        ("6704", 2),
        ("6704", 3),
        ("6478", 1),
    )

    def render(self, info: RenderInfo, chassis: Chassis) -> None:
        for card_type, index in self._CARDS:
            card = chassis.cards_of_type(card_type)[index]
            if card.status is None:
                raise ValueError(f"card {card_type} has no status LED")
            card.status.g = 1.0

    def info(self) -> PatternInfo:
        return PatternInfo("mapper", "global")

    def bootstrap(self, chassis: Chassis) -> None:
        pass


class Snake(Pattern):
    """A single light sweeping back and forth over all LEDs."""

    def render(self, info: RenderInfo, chassis: Chassis) -> None:
        lit = math.floor(waves.sin(info.start, 1) * len(chassis.leds))
        for index, pixel in enumerate(chassis.leds):
            if index == lit:
                pixel.set_clamped(1.0, 1.0, 0.5)
            else:
                pixel.set_clamped(0.0, 0.0, 0.0)

    def info(self) -> PatternInfo:
        return PatternInfo("snake", "global")

    def bootstrap(self, chassis: Chassis) -> None:
        pass


class Static(Pattern):
    """Every LED a constant pink."""

    def render(self, info: RenderInfo, chassis: Chassis) -> None:
        for pixel in chassis.leds:
            pixel.set_clamped(1.0, 0.5, 0.5)

    def info(self) -> PatternInfo:
        return PatternInfo("static", "global")

    def bootstrap(self, chassis: Chassis) -> None:
        pass


class GreenStatus(Pattern):
    def render(self, info: RenderInfo, chassis: Chassis) -> None:
        for pixel in chassis.status_leds:
            pixel.set_clamped(0.3, 1.0, 0.0)

    def info(self) -> PatternInfo:
        return PatternInfo("greenstatus", "status")

    def bootstrap(self, chassis: Chassis) -> None:
        pass


class RedStatus(Pattern):
    def render(self, info: RenderInfo, chassis: Chassis) -> None:
        for pixel in chassis.status_leds:
            pixel.set_clamped(1.0, 0.3, 0.0)

    def info(self) -> PatternInfo:
        return PatternInfo("redstatus", "status")

    def bootstrap(self, chassis: Chassis) -> None:
        pass


class Strobe(Pattern):
    """All LEDs flash white together."""

    def render(self, info: RenderInfo, chassis: Chassis) -> None:
        v = square(waves.sin_full(info.start, 100))
        for pixel in chassis.leds:
            pixel.set_clamped(v, v, v)

    def info(self) -> PatternInfo:
        return PatternInfo("strobe", "global")

    def bootstrap(self, chassis: Chassis) -> None:
        pass


class SUP720(Pattern):
    """Supervisor engine front panel: steady system LEDs, disk and port activity."""

    def __init__(self) -> None:
        self._disk0: Fake | None = None
        self._disk1: Fake | None = None
        self._port0: Fake | None = None
        self._port1: Fake | None = None

    def render(self, info: RenderInfo, chassis: Chassis) -> None:
        if self._disk0 is None or self._disk1 is None or self._port0 is None or self._port1 is None:
            raise RuntimeError("sup720 pattern rendered before bootstrap")
        for card in chassis.cards_of_type("sup720"):
            leds = card.labeled
            leds["system"].set_clamped(0.2, 1.0, 0.0)
            leds["active"].set_clamped(0.2, 1.0, 0.0)
            leds["mgmt"].set_clamped(1.0, 0.0, 0.0)
            leds["disk0"].set_clamped(0.0, self._disk0.trig(), 0.0)
            leds["disk1"].set_clamped(0.0, self._disk1.trig(), 0.0)
            p0 = invert(self._port0.trig())
            leds["p1"].set_clamped(0.7 * p0, 0.5 * p0, 0.0 * p0)
            p1 = invert(self._port1.trig())
            leds["p2"].set_clamped(0.7 * p1, 0.5 * p1, 0.0 * p1)

    def info(self) -> PatternInfo:
        return PatternInfo("sup720", "misc")

    def bootstrap(self, chassis: Chassis) -> None:
        def blinker() -> RandomBlinker:
            return RandomBlinker(15, 40, 1.0, 10.0)

        self._disk0 = RandomInterval(40.0, 12000.0, 0.1, 6.5, blinker())
        self._disk1 = RandomInterval(40.0, 12000.0, 0.1, 6.5, blinker())
        self._port0 = RandomInterval(0.3, 12.0, 0.07, 6.5, blinker())
        self._port1 = RandomInterval(0.2, 7.0, 0.07, 12.0, blinker())