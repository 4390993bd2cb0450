"""Domain entities for the bill-of-materials tracker."""

from .core import (
    AssemblyKind,
    PartEntry,
    entries_to_mapping,
    sorted_by_name,
    sorted_by_quantity,
)

__all__ = [
    "AssemblyKind",
    "PartEntry",
    "entries_to_mapping",
    "sorted_by_name",
    "sorted_by_quantity",
]
