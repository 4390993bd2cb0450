"""Parsing of the line-oriented command language into typed commands.

Grammar (one command per line, instruction and parameters separated by a
single space)::

    addAssembly <name>=<amount>:<part>;<amount>:<part>;...
    removeAssembly <name>
    printAssembly <name>
    getAssemblies <name>
    getComponents <name>
    addPart <name>+<amount>:<part>
    removePart <name>-<amount>:<part>
    quit
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Mapping, Tuple

from bomtracker.entities.core import PartEntry, entries_to_mapping
from bomtracker.structure.errors import InvalidQuantity

NAME_PATTERN = r"[a-zA-Z]+"
AMOUNT_PATTERN = r"[1-9][0-9]*"
PART_ENTRY_PATTERN = rf"(?:{AMOUNT_PATTERN}):(?:{NAME_PATTERN})"

# amounts must fit a signed 64-bit integer
MAX_AMOUNT = 2**63 - 1

_NAME_RE = re.compile(NAME_PATTERN)
_ASSEMBLY_RE = re.compile(
    rf"(?P<name>{NAME_PATTERN})=(?P<parts>{PART_ENTRY_PATTERN}(?:;{PART_ENTRY_PATTERN})*)"
)
_ADD_PART_RE = re.compile(
    rf"(?P<name>{NAME_PATTERN})\+(?P<amount>{AMOUNT_PATTERN}):(?P<part>{NAME_PATTERN})"
)
_REMOVE_PART_RE = re.compile(
    rf"(?P<name>{NAME_PATTERN})-(?P<amount>{AMOUNT_PATTERN}):(?P<part>{NAME_PATTERN})"
)


class InputError(Exception):
    """Base exception for malformed command input."""


class InvalidInstruction(InputError):
    def __init__(self, instruction: str):
        self.instruction = instruction
        super().__init__(f"Unknown instruction '{instruction}'")


class InvalidParameters(InputError):
    def __init__(self, usage: str):
        self.usage = usage
        super().__init__(f"Invalid parameters, usage: {usage}")


class UnexpectedParameters(InputError):
    """Raised when an instruction that takes no parameters receives some."""

    def __init__(self, instruction: str, params: str):
        self.instruction = instruction
        self.params = params
        super().__init__(f"Instruction '{instruction}' takes no parameters: {params}")


class DuplicateParts(InputError):
    """Raised when an assembly literal lists the same part more than once."""

    def __init__(self, assembly_name: str, part_names: List[str]):
        self.assembly_name = assembly_name
        self.part_names = sorted(part_names)
        super().__init__(
            f"Assembly '{assembly_name}' lists parts more than once: {', '.join(self.part_names)}"
        )


@dataclass(frozen=True, slots=True)
class DefineAssembly:
    name: str
    entries: Tuple[PartEntry, ...]

    @property
    def parts(self) -> Dict[str, int]:
        return entries_to_mapping(self.entries)


@dataclass(frozen=True, slots=True)
class UndefineAssembly:
    name: str


@dataclass(frozen=True, slots=True)
class ShowAssembly:
    name: str


@dataclass(frozen=True, slots=True)
class ListAssemblies:
    name: str


@dataclass(frozen=True, slots=True)
class ListComponents:
    name: str


@dataclass(frozen=True, slots=True)
class AddPart:
    assembly_name: str
    part_name: str
    amount: int


@dataclass(frozen=True, slots=True)
class RemovePart:
    assembly_name: str
    part_name: str
    amount: int


@dataclass(frozen=True, slots=True)
class Quit:
    pass


Command = (
    DefineAssembly
    | UndefineAssembly
    | ShowAssembly
    | ListAssemblies
    | ListComponents
    | AddPart
    | RemovePart
    | Quit
)


def parse_amount(assembly_name: str, part_name: str, text: str) -> int:
    """Convert an amount literal, rejecting values beyond :data:`MAX_AMOUNT`."""

    try:
        amount = int(text)
    except ValueError as exc:
        raise InvalidQuantity(assembly_name, part_name, text) from exc
    if amount > MAX_AMOUNT:
        raise InvalidQuantity(assembly_name, part_name, text)
    return amount


def _parse_define(params: str, usage: str) -> DefineAssembly:
    match = _ASSEMBLY_RE.fullmatch(params)
    if match is None:
        raise InvalidParameters(usage)
    name = match.group("name")
    entries: List[PartEntry] = []
    seen: set[str] = set()
    duplicates: set[str] = set()
    for literal in match.group("parts").split(";"):
        amount_text, part_name = literal.split(":")
        amount = parse_amount(name, part_name, amount_text)
        if part_name in seen:
            duplicates.add(part_name)
            continue
        seen.add(part_name)
        entries.append(PartEntry(name=part_name, quantity=amount))
    if duplicates:
        raise DuplicateParts(name, list(duplicates))
    return DefineAssembly(name=name, entries=tuple(entries))


def _parse_name(factory: Callable[[str], Command]) -> Callable[[str, str], Command]:
    def parse(params: str, usage: str) -> Command:
        if not _NAME_RE.fullmatch(params):
            raise InvalidParameters(usage)
        return factory(params)

    return parse


def _parse_part_change(
    pattern: re.Pattern[str], factory: Callable[[str, str, int], Command]
) -> Callable[[str, str], Command]:
    def parse(params: str, usage: str) -> Command:
        match = pattern.fullmatch(params)
        if match is None:
            raise InvalidParameters(usage)
        name, part_name = match.group("name"), match.group("part")
        return factory(name, part_name, parse_amount(name, part_name, match.group("amount")))

    return parse


def _parse_quit(params: str, usage: str) -> Command:
    return Quit()


@dataclass(frozen=True, slots=True)
class CommandSpec:
    """Usage text and parameter parser registered for one instruction."""

    usage: str
    parse: Callable[[str, str], Command]
    takes_parameters: bool = True


COMMANDS: Mapping[str, CommandSpec] = {
    "addAssembly": CommandSpec(
        "addAssembly <nameAssembly>=<amount1>:<name1>;<amount2>:<name2>;...;<amountn>:<namen>",
        _parse_define,
    ),
    "removeAssembly": CommandSpec(
        "removeAssembly <nameAssembly>", _parse_name(UndefineAssembly)
    ),
    "printAssembly": CommandSpec("printAssembly <nameAssembly>", _parse_name(ShowAssembly)),
    "getAssemblies": CommandSpec("getAssemblies <nameAssembly>", _parse_name(ListAssemblies)),
    "getComponents": CommandSpec("getComponents <nameAssembly>", _parse_name(ListComponents)),
    "addPart": CommandSpec(
        "addPart <nameAssembly>+<amount>:<name>", _parse_part_change(_ADD_PART_RE, AddPart)
    ),
    "removePart": CommandSpec(
        "removePart <nameAssembly>-<amount>:<name>",
        _parse_part_change(_REMOVE_PART_RE, RemovePart),
    ),
    "quit": CommandSpec("quit", _parse_quit, takes_parameters=False),
}


def parse_command(line: str) -> Command:
    """Parse a single input line into a command object."""

    instruction, _, params = line.partition(" ")
    spec = COMMANDS.get(instruction)
    if spec is None:
        raise InvalidInstruction(instruction)
    if not spec.takes_parameters and params:
        raise UnexpectedParameters(instruction, params)
    return spec.parse(params, spec.usage)


__all__ = [
    "COMMANDS",
    "Command",
    "CommandSpec",
    "DefineAssembly",
    "UndefineAssembly",
    "ShowAssembly",
    "ListAssemblies",
    "ListComponents",
    "AddPart",
    "RemovePart",
    "Quit",
    "InputError",
    "InvalidInstruction",
    "InvalidParameters",
    "UnexpectedParameters",
    "DuplicateParts",
    "MAX_AMOUNT",
    "parse_amount",
    "parse_command",
]
