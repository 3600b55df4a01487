"""A chassis: an ordered set of line cards and flat views of their LEDs."""

from __future__ import annotations

from collections.abc import Callable, Iterable

from slisko.cards import (
    LineCard,
    gen_6478,
    gen_6704,
    gen_a9k_8t,
    gen_a9k_40ge,
    gen_a9k_rsp440_se,
    gen_blank,
    gen_sup720,
)
from slisko.pixel import Pixel

_CARD_FACTORIES: dict[str, Callable[[], LineCard]] = {
    "a9k-8t-l": gen_a9k_8t,
    "blank": gen_blank,
    "a9k-40ge-l": gen_a9k_40ge,
    "a9k-rsp400-se": gen_a9k_rsp440_se,
    "6478": gen_6478,
    "6704": gen_6704,
    "sup720": gen_sup720,
}


def cards_from_definition(names: Iterable[str]) -> list[LineCard]:
    """Build fresh line cards for the given model names.

    Names that are not a known card model are skipped.
    """
    return [_CARD_FACTORIES[name]() for name in names if name in _CARD_FACTORIES]


class Chassis:
    """Line cards in slot order, with every LED, link LED and status LED collected."""

    def __init__(self, line_cards: Iterable[LineCard]) -> None:
        self.line_cards: list[LineCard] = list(line_cards)
        self.leds: list[Pixel] = [p for card in self.line_cards for p in card.leds]
        self.link_ports: list[Pixel] = [
            p for card in self.line_cards if card.active for p in card.link
        ]
        self.status_leds: list[Pixel] = [
            card.status
            for card in self.line_cards
            if card.active and card.status is not None
        ]

    def cards_of_type(self, card_type: str) -> list[LineCard]:
        """All cards whose model name is ``card_type``, in slot order."""
        return [card for card in self.line_cards if card.name == card_type]

    def card_order(self) -> list[str]:
        """The model name of each card, in slot order."""
        return [card.name for card in self.line_cards]

    def leds_with_label(self, label: str) -> list[Pixel]:
        """The LED carrying ``label`` on each card that has one."""
        return [card.labeled[label] for card in self.line_cards if label in card.labeled]