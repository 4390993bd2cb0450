"""Unit tests for bomtracker.entities.core."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from bomtracker.entities import (
    AssemblyKind,
    PartEntry,
    entries_to_mapping,
    sorted_by_name,
    sorted_by_quantity,
)


def test_part_entry_validates_name_and_quantity() -> None:
    entry = PartEntry(name="wheel", quantity=2)
    assert entry.as_tuple() == ("wheel", 2)

    with pytest.raises(ValidationError):
        PartEntry(name="wheel2", quantity=2)
    with pytest.raises(ValidationError):
        PartEntry(name="wheel", quantity=0)


def test_part_entry_is_frozen() -> None:
    entry = PartEntry(name="wheel", quantity=2)
    with pytest.raises(ValidationError):
        entry.quantity = 3  # type: ignore[misc]


def test_assembly_kind_accepts_string_values() -> None:
    assert AssemblyKind("component") is AssemblyKind.COMPONENT
    assert AssemblyKind.ASSEMBLY == "assembly"


def test_entries_to_mapping_preserves_order() -> None:
    entries = [PartEntry(name="b", quantity=1), PartEntry(name="a", quantity=4)]
    assert list(entries_to_mapping(entries).items()) == [("b", 1), ("a", 4)]


def test_sorting_helpers() -> None:
    counts = {"b": 2, "Z": 2, "a": 7, "c": 1}

    assert [entry.name for entry in sorted_by_name(counts)] == ["Z", "a", "b", "c"]
    assert [entry.as_tuple() for entry in sorted_by_quantity(counts)] == [
        ("a", 7),
        ("Z", 2),
        ("b", 2),
        ("c", 1),
    ]
