from slisko.cards import (
    LineCard,
    gen_6478,
    gen_6704,
    gen_a9k_40ge,
    gen_a9k_8t,
    gen_a9k_rsp440_se,
    gen_blank,
    gen_sup720,
    slice_map,
)
from slisko.pixel import Pixel, Position


def contains(leds, pixel):
    return any(p is pixel for p in leds)


def test_slice_map_labels_from_one():
    pixels = [Pixel(), Pixel(), Pixel()]
    labels = slice_map(pixels, "p")
    assert list(labels) == ["p1", "p2", "p3"]
    assert labels["p1"] is pixels[0]
    assert labels["p3"] is pixels[2]


def test_slice_map_empty():
    assert slice_map([], "p") == {}


def test_all_references_point_into_leds():
    cards = [
        gen_6478(),
        gen_6704(),
        gen_sup720(),
        gen_a9k_rsp440_se(),
        gen_a9k_8t(),
        gen_a9k_40ge(),
    ]
    for card in cards:
        assert card.active
        assert all(contains(card.leds, p) for p in card.link)
        assert all(contains(card.leds, p) for p in card.labeled.values())
        if card.status is not None:
            assert contains(card.leds, card.status)


def test_leds_are_distinct():
    cards = [
        gen_6478(),
        gen_6704(),
        gen_sup720(),
        gen_a9k_rsp440_se(),
        gen_a9k_8t(),
        gen_a9k_40ge(),
    ]
    for card in cards:
        assert len({id(p) for p in card.leds}) == len(card.leds)


def test_6478_layout():
    card = gen_6478()
    assert card.name == "6478"
    assert card.image == "6478.png"
    assert len(card.leds) == 49
    assert len(card.link) == 48
    assert card.status is card.leds[0]
    assert card.labeled["p1"] is card.leds[1]
    assert card.labeled["p48"] is card.leds[48]
    assert card.leds[0].position == Position(11, 73, 5)
    assert card.leds[48].position == Position(11, 919, 5)


def test_6704_layout():
    card = gen_6704()
    assert len(card.leds) == 5
    assert card.link == card.leds[1:5]
    assert card.leds[0].position == Position(27, 55, 8)
    assert set(card.labeled) == {"status", "p1", "p2", "p3", "p4"}


def test_sup720_labels():
    card = gen_sup720()
    assert card.name == "sup720"
    assert card.labeled["disk0"] is card.leds[4]
    assert card.labeled["disk1"] is card.leds[5]
    assert card.labeled["mgmt"] is card.leds[3]
    assert card.link == card.leds[6:9]
    assert card.labeled["p3"] is card.leds[8]
    assert card.leds[8].position == Position(32, 725, 5)


def test_blank_card():
    card = gen_blank()
    assert isinstance(card, LineCard)
    assert card.name == "blank"
    assert not card.active
    assert card.leds == []
    assert card.status is None
    assert card.labeled == {}


def test_rsp440_layout():
    card = gen_a9k_rsp440_se()
    assert card.name == "A9K-RSP440-SE"
    assert len(card.leds) == 24
    assert card.status is None
    assert card.link == card.leds[0:12]
    assert card.labeled["fail"] is card.leds[12]
    assert card.labeled["gps"] is card.leds[20]
    assert card.labeled["p12"] is card.leds[11]
    assert card.leds[12].position == Position(30, 857, 4)
    assert card.leds[21].position == Position()


def test_a9k_8t_layout():
    card = gen_a9k_8t()
    assert card.name == "A9K-8T-L"
    assert len(card.leds) == 10
    assert card.status is card.leds[8]
    assert card.link == card.leds[0:8]
    assert card.labeled["p1"] is card.leds[1]
    assert card.labeled["p9"] is card.leds[9]
    assert card.leds[8].position == Position(73, 985, 5)
    assert card.leds[9].position == Position()


def test_a9k_40ge_layout():
    card = gen_a9k_40ge()
    assert card.name == "A9K-40GE-L"
    assert len(card.leds) == 41
    assert len(card.link) == 40
    assert card.status is card.leds[40]
    assert card.labeled["p40"] is card.leds[39]
    assert card.leds[0].position == Position(56, 78, 5)
    assert card.leds[40].position == Position(75, 985, 5)
    assert all(p.position.size == 5 for p in card.leds)


def test_generators_return_fresh_cards():
    a, b = gen_6704(), gen_6704()
    a.leds[0].set_clamped(1.0, 1.0, 1.0)
    assert b.leds[0].rgb == (0.0, 0.0, 0.0)