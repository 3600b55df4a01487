import tomllib

import pytest

from slisko.configuration import ChassisDefinition, MappingEntry, load_from_file

SAMPLE = """
LEDAmount = 132
Linecards = ["a9k-rsp400-se", "a9k-40ge-l", "blank"]
Patterns = ["greenstatus", "a9k-40ge-l"]

[[mapping]]
gen = 3

[[mapping]]
card = 1
"""


def write(tmp_path, text):
    path = tmp_path / "chassis.toml"
    path.write_text(text, encoding="utf-8")
    return path


def test_load_sample(tmp_path):
    d = load_from_file(write(tmp_path, SAMPLE))
    assert d.led_amount == 132
    assert d.linecards == ["a9k-rsp400-se", "a9k-40ge-l", "blank"]
    assert d.patterns == ["greenstatus", "a9k-40ge-l"]
    assert d.mapping == [MappingEntry(gen=3), MappingEntry(card=1)]


def test_mapping_entry_kinds(tmp_path):
    d = load_from_file(write(tmp_path, SAMPLE))
    gen, card = d.mapping
    assert gen.is_gen() and not gen.is_card()
    assert card.is_card() and not card.is_gen()


def test_card_zero_counts_as_card():
    entry = MappingEntry(card=0)
    assert entry.is_card()
    assert not entry.is_gen()


def test_keys_match_case_insensitively(tmp_path):
    d = load_from_file(write(tmp_path, 'ledamount = 10\nlinecards = ["6704"]\n'))
    assert d.led_amount == 10
    assert d.linecards == ["6704"]


def test_empty_file_gives_defaults(tmp_path):
    assert load_from_file(write(tmp_path, "")) == ChassisDefinition()


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_from_file(tmp_path / "absent.toml")


def test_invalid_toml_raises(tmp_path):
    with pytest.raises(tomllib.TOMLDecodeError):
        load_from_file(write(tmp_path, "LEDAmount = = 3"))


def test_wrong_type_raises(tmp_path):
    with pytest.raises(ValueError):
        load_from_file(write(tmp_path, 'LEDAmount = "many"'))
    with pytest.raises(ValueError):
        load_from_file(write(tmp_path, "Linecards = [1, 2]"))