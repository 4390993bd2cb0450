"""Tests for the command language parser."""

from __future__ import annotations

import pytest

from bomtracker.commands import (
    DuplicateParts,
    InvalidInstruction,
    InvalidParameters,
    UnexpectedParameters,
    parse_command,
)
from bomtracker.commands.parser import (
    MAX_AMOUNT,
    AddPart,
    DefineAssembly,
    ListAssemblies,
    ListComponents,
    Quit,
    RemovePart,
    ShowAssembly,
    UndefineAssembly,
)
from bomtracker.structure import InvalidQuantity


def test_parse_add_assembly_keeps_part_order() -> None:
    command = parse_command("addAssembly Bike=2:wheel;1:Frame;12:spoke")

    assert isinstance(command, DefineAssembly)
    assert command.name == "Bike"
    assert [entry.as_tuple() for entry in command.entries] == [
        ("wheel", 2),
        ("Frame", 1),
        ("spoke", 12),
    ]
    assert command.parts == {"wheel": 2, "Frame": 1, "spoke": 12}


def test_parse_add_assembly_passes_large_amounts_through() -> None:
    command = parse_command("addAssembly Bike=5000:wheel")
    assert command.parts == {"wheel": 5000}


def test_parse_add_assembly_rejects_duplicate_parts() -> None:
    with pytest.raises(DuplicateParts) as excinfo:
        parse_command("addAssembly Bike=2:wheel;1:bell;3:wheel;1:bell")

    assert excinfo.value.assembly_name == "Bike"
    assert excinfo.value.part_names == ["bell", "wheel"]


@pytest.mark.parametrize(
    "line",
    [
        "addAssembly Bike",
        "addAssembly Bike=",
        "addAssembly Bike=0:wheel",
        "addAssembly Bike=2:wheel;",
        "addAssembly Bike=2:wheel1",
        "addAssembly Bike=-2:wheel",
        "addAssembly  Bike=2:wheel",
    ],
)
def test_parse_add_assembly_rejects_malformed_parameters(line: str) -> None:
    with pytest.raises(InvalidParameters) as excinfo:
        parse_command(line)
    assert excinfo.value.usage.startswith("addAssembly <nameAssembly>=")


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("removeAssembly Bike", UndefineAssembly("Bike")),
        ("printAssembly Bike", ShowAssembly("Bike")),
        ("getAssemblies Bike", ListAssemblies("Bike")),
        ("getComponents Bike", ListComponents("Bike")),
        ("addPart Bike+3:bell", AddPart("Bike", "bell", 3)),
        ("removePart Bike-1:bell", RemovePart("Bike", "bell", 1)),
        ("quit", Quit()),
    ],
)
def test_parse_simple_commands(line: str, expected: object) -> None:
    assert parse_command(line) == expected


@pytest.mark.parametrize(
    "line",
    [
        "removeAssembly Bike2",
        "printAssembly",
        "getComponents Bike Bell",
        "addPart Bike-3:bell",
        "removePart Bike+3:bell",
        "addPart Bike+03:bell",
    ],
)
def test_parse_rejects_invalid_parameters(line: str) -> None:
    with pytest.raises(InvalidParameters):
        parse_command(line)


def test_parse_unknown_instruction() -> None:
    with pytest.raises(InvalidInstruction) as excinfo:
        parse_command("buildBike Bike")
    assert excinfo.value.instruction == "buildBike"


def test_parse_quit_with_parameters() -> None:
    with pytest.raises(UnexpectedParameters) as excinfo:
        parse_command("quit now")
    assert excinfo.value.instruction == "quit"
    assert excinfo.value.params == "now"


def test_parse_amount_beyond_integer_range() -> None:
    too_large = str(MAX_AMOUNT + 1)
    with pytest.raises(InvalidQuantity) as excinfo:
        parse_command(f"addPart Bike+{too_large}:bell")

    assert excinfo.value.amount == too_large
    assert excinfo.value.assembly_name == "Bike"
    assert excinfo.value.part_name == "bell"
