"""Line cards and the LED layouts of each supported card model."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from slisko.pixel import Pixel


@dataclass(eq=False)
class LineCard:
    """A card in the chassis with its LEDs and named groups of them."""

    name: str
    image: str
    active: bool
    leds: list[Pixel] = field(default_factory=list)
    status: Pixel | None = None
    link: list[Pixel] = field(default_factory=list)
    labeled: dict[str, Pixel] = field(default_factory=dict)


def slice_map(pixels: Iterable[Pixel], prefix: str) -> dict[str, Pixel]:
    """Label pixels ``<prefix>1``, ``<prefix>2``, ... in order."""
    return {f"{prefix}{i}": p for i, p in enumerate(pixels, start=1)}


def _place(pixels: Sequence[Pixel], positions: Iterable[tuple[float, float, float]]) -> None:
    for pixel, (x, y, size) in zip(pixels, positions):
        pixel.set_position(x, y, size)


def _new_leds(count: int) -> list[Pixel]:
    return [Pixel() for _ in range(count)]


def gen_6478() -> LineCard:
    leds = _new_leds(49)
    card = LineCard(
        name="6478",
        image="6478.png",
        active=True,
        leds=leds,
        status=leds[0],
        link=leds[1:49],
        labeled={"status": leds[0]},
    )
    card.labeled.update(slice_map(leds[1:49], "p"))
    ys = (
        73,
        88, 101, 114, 128, 141, 154, 167, 180, 194, 207, 220, 233,
        323, 336, 349, 362, 375, 387, 400, 413, 426, 439, 451, 464,
        549, 562, 575, 588, 601, 613, 626, 639, 652, 665, 677, 690,
        778, 791, 804, 817, 830, 842, 855, 868, 881, 894, 906, 919,
    )
    _place(leds, ((11, y, 5) for y in ys))
    return card


def gen_6704() -> LineCard:
    leds = _new_leds(5)
    card = LineCard(
        name="6704",
        image="6704.png",
        active=True,
        leds=leds,
        status=leds[0],
        link=leds[1:5],
        labeled={"status": leds[0]},
    )
    card.labeled.update(slice_map(leds[1:5], "p"))
    _place(leds, [(27, 55, 8), (12, 110, 5), (12, 129, 5), (12, 148, 5), (12, 168, 5)])
    return card


def gen_sup720() -> LineCard:
    leds = _new_leds(9)
    card = LineCard(
        name="sup720",
        image="sup720.png",
        active=True,
        leds=leds,
        status=leds[0],
        link=leds[6:9],
        labeled={
            "status": leds[0],
            "system": leds[1],
            "active": leds[2],
            "mgmt": leds[3],
            "disk0": leds[4],
            "disk1": leds[5],
        },
    )
    card.labeled.update(slice_map(leds[6:9], "p"))
    _place(
        leds,
        [
            (24, 57, 5),
            (24, 71, 5),
            (24, 85, 5),
            (24, 98, 5),
            (54, 105, 5),
            (28, 291, 5),
            (31, 579, 5),
            (31, 652, 5),
            (32, 725, 5),
        ],
    )
    return card


def gen_blank() -> LineCard:
    return LineCard(name="blank", image="blank.png", active=False)


def gen_a9k_rsp440_se() -> LineCard:
    leds = _new_leds(24)
    labels = ("fail", "crit", "sso", "aco", "maj", "fc_fault", "sync", "min", "gps")
    card = LineCard(
        name="A9K-RSP440-SE",
        image="a9k-rsp440-se.png",
        active=True,
        leds=leds,
        link=leds[0:12],
        labeled=dict(zip(labels, leds[12:21])),
    )
    card.labeled.update(slice_map(leds[0:12], "p"))
    _place(
        leds,
        [
            # sync 0, sync 1
            (24, 68, 5), (24, 98, 5),
            (24, 125, 5), (24, 150, 5),
            # SFP
            (57, 187, 5), (57, 198, 5),
            # IEEE 1588
            (24, 240, 5), (24, 265, 5),
            # management LAN 0, LAN 1
            (24, 582, 5), (24, 610, 5),
            (24, 640, 5), (24, 665, 5),
            # 3x3 alarm block
            (30, 857, 4), (43, 857, 4), (57, 857, 4),
            (30, 880, 4), (43, 880, 4), (57, 880, 4),
            (30, 900, 4), (43, 900, 4), (57, 900, 4),
        ],
    )
    return card


def gen_a9k_8t() -> LineCard:
    leds = _new_leds(10)
    card = LineCard(
        name="A9K-8T-L",
        image="a9k-8t-l.png",
        active=True,
        leds=leds,
        status=leds[8],
        link=leds[0:8],
        labeled={"status": leds[8]},
    )
    card.labeled.update(slice_map(leds[1:10], "p"))
    _place(
        leds,
        [
            (75, 73, 5), (76, 180, 5), (76, 280, 5), (76, 380, 5),
            (76, 530, 5), (76, 635, 5), (76, 740, 5), (76, 845, 5),
            (73, 985, 5),
        ],
    )
    return card


def gen_a9k_40ge() -> LineCard:
    leds = _new_leds(41)
    card = LineCard(
        name="A9K-40GE-L",
        image="a9k-40ge-l.png",
        active=True,
        leds=leds,
        status=leds[40],
        link=leds[0:40],
        labeled={"status": leds[40]},
    )
    card.labeled.update(slice_map(leds[0:40], "p"))
    blocks = [
        [(56, 78), (56, 99)]
        + [(57, y) for y in (117, 138, 156, 177, 195, 216, 233, 254)],
        [(57, y) for y in (290, 311, 329, 350, 368, 389, 407, 428, 446, 467)],
        [(56, y) for y in (531, 552, 570, 591, 609, 630, 648, 669, 687, 708)],
        [(56, y) for y in (744, 765, 783, 804, 822, 843, 861, 882, 900, 921)],
        [(75, 985)],
    ]
    _place(leds, ((x, y, 5) for block in blocks for x, y in block))
    return card