import pytest

from slisko.cards import LineCard, gen_6704, gen_blank, gen_sup720
from slisko.chassis import Chassis, cards_from_definition
from slisko.pixel import Pixel


def test_cards_from_definition_keeps_order_and_skips_unknown():
    cards = cards_from_definition(["sup720", "nonsense", "6704", "blank"])
    assert [c.name for c in cards] == ["sup720", "6704", "blank"]


def test_cards_from_definition_rsp_key():
    cards = cards_from_definition(["a9k-rsp400-se", "a9k-8t-l", "a9k-40ge-l", "6478"])
    assert [c.name for c in cards] == ["A9K-RSP440-SE", "A9K-8T-L", "A9K-40GE-L", "6478"]


def test_cards_from_definition_builds_fresh_cards():
    first, second = cards_from_definition(["6704", "6704"])
    assert first is not second
    assert all(a is not b for a, b in zip(first.leds, second.leds))


def test_card_order():
    chassis = Chassis(cards_from_definition(["6478", "blank", "sup720"]))
    assert chassis.card_order() == ["6478", "blank", "sup720"]


def test_leds_are_shared_with_cards():
    cards = cards_from_definition(["6704", "sup720"])
    chassis = Chassis(cards)
    expected = cards[0].leds + cards[1].leds
    assert len(chassis.leds) == len(expected)
    assert all(a is b for a, b in zip(chassis.leds, expected))


def test_link_ports_skip_inactive_cards():
    inactive_led = Pixel()
    inactive = LineCard(
        name="spare", image="spare.png", active=False,
        leds=[inactive_led], status=inactive_led, link=[inactive_led],
    )
    active = gen_6704()
    chassis = Chassis([inactive, active])
    assert all(p is not inactive_led for p in chassis.link_ports)
    assert len(chassis.link_ports) == len(active.link)
    assert chassis.status_leds == [active.status]


def test_status_leds_skip_cards_without_status():
    chassis = Chassis(cards_from_definition(["a9k-rsp400-se", "6704", "blank"]))
    assert len(chassis.status_leds) == 1
    assert chassis.status_leds[0] is chassis.line_cards[1].status


def test_cards_of_type_returns_the_cards_themselves():
    chassis = Chassis(cards_from_definition(["6704", "sup720", "6704"]))
    found = chassis.cards_of_type("6704")
    assert len(found) == 2
    assert found[0] is chassis.line_cards[0]
    assert found[1] is chassis.line_cards[2]
    assert chassis.cards_of_type("missing") == []


def test_leds_with_label():
    sup = gen_sup720()
    chassis = Chassis([gen_blank(), sup, gen_6704()])
    disks = chassis.leds_with_label("disk0")
    assert disks == [sup.labeled["disk0"]]
    assert len(chassis.leds_with_label("status")) == 2


@pytest.mark.parametrize("names", [[], ["blank"], ["blank", "blank"]])
def test_empty_chassis_views(names):
    chassis = Chassis(cards_from_definition(names))
    assert chassis.leds == []
    assert chassis.link_ports == []
    assert chassis.status_leds == []