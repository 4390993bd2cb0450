"""Core value objects shared by the product structure and its adapters."""

from __future__ import annotations

import re
from enum import Enum
from typing import Dict, Iterable, List, Mapping, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

_NAME_PATTERN = re.compile(r"[a-zA-Z]+")


class AssemblyKind(str, Enum):
    """Classification of a name referenced inside the product structure."""

    ASSEMBLY = "assembly"
    COMPONENT = "component"


class PartEntry(BaseModel):
    """A single ``(name, quantity)`` pair inside an assembly's part list."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Alphabetic part name")
    quantity: int = Field(..., ge=1, description="Number of units of the part")

    @field_validator("name")
    @classmethod
    def _validate_name(cls, value: str) -> str:
        if not _NAME_PATTERN.fullmatch(value):
            raise ValueError("part names must consist of letters only")
        return value

    def as_tuple(self) -> Tuple[str, int]:
        return self.name, self.quantity


def entries_to_mapping(entries: Iterable[PartEntry]) -> Dict[str, int]:
    """Collapse entries into a ``name -> quantity`` mapping preserving order."""

    mapping: Dict[str, int] = {}
    for entry in entries:
        mapping[entry.name] = entry.quantity
    return mapping


def sorted_by_name(counts: Mapping[str, int]) -> List[PartEntry]:
    """Return entries ordered by part name ascending."""

    return [PartEntry(name=name, quantity=counts[name]) for name in sorted(counts)]


def sorted_by_quantity(counts: Mapping[str, int]) -> List[PartEntry]:
    """Return entries ordered by quantity descending, ties broken by name."""

    ordered = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    return [PartEntry(name=name, quantity=quantity) for name, quantity in ordered]


__all__ = [
    "AssemblyKind",
    "PartEntry",
    "entries_to_mapping",
    "sorted_by_name",
    "sorted_by_quantity",
]
