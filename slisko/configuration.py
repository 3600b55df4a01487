"""Chassis definitions loaded from TOML files."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from os import PathLike
from typing import Any


@dataclass
class MappingEntry:
    """One output segment: either ``gen`` blank LEDs or the LEDs of card ``card``."""

    gen: int | None = None
    card: int | None = None

    def is_gen(self) -> bool:
        return self.gen is not None

    def is_card(self) -> bool:
        return self.card is not None


@dataclass
class ChassisDefinition:
    """What a chassis holds, which patterns start enabled and how LEDs are wired."""

    led_amount: int = 0
    linecards: list[str] = field(default_factory=list)
    patterns: list[str] = field(default_factory=list)
    mapping: list[MappingEntry] = field(default_factory=list)


def _lookup(table: dict[str, Any], key: str) -> Any:
    if key in table:
        return table[key]
    lowered = key.lower()
    for name, value in table.items():
        if name.lower() == lowered:
            return value
    return None


def _int(value: Any, what: str) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{what} must be an integer, got {value!r}")
    return value


def _strings(value: Any, what: str) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"{what} must be a list of strings")
    return list(value)


def _mapping(value: Any) -> list[MappingEntry]:
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, dict) for v in value):
        raise ValueError("mapping must be an array of tables")
    return [
        MappingEntry(
            gen=_int(_lookup(entry, "gen"), "mapping.gen"),
            card=_int(_lookup(entry, "card"), "mapping.card"),
        )
        for entry in value
    ]


def _from_document(doc: dict[str, Any]) -> ChassisDefinition:
    return ChassisDefinition(
        led_amount=_int(_lookup(doc, "LEDAmount"), "LEDAmount") or 0,
        linecards=_strings(_lookup(doc, "Linecards"), "Linecards"),
        patterns=_strings(_lookup(doc, "Patterns"), "Patterns"),
        mapping=_mapping(_lookup(doc, "mapping")),
    )


def load_from_file(path: str | PathLike[str]) -> ChassisDefinition:
    """Read a chassis definition from a TOML file.

    Raises OSError if the file cannot be read, tomllib.TOMLDecodeError if it
    is not TOML, and ValueError if a field has the wrong type.
    """
    with open(path, "rb") as fh:
        doc = tomllib.load(fh)
    return _from_document(doc)