"""Product structure public API."""

from __future__ import annotations

from .errors import (
    AssemblyAlreadyExists,
    AssemblyNotFound,
    BomError,
    CycleDetected,
    EmptyAssembly,
    InsufficientQuantity,
    InvalidQuantity,
    PartNotFound,
)
from .graph import ProductStructureGraph
from .record import MAX_PART_QUANTITY, AssemblyRecord
from .validator import GraphValidator, InvariantChecker, ValidationReport

__all__ = [
    "AssemblyRecord",
    "MAX_PART_QUANTITY",
    "ProductStructureGraph",
    "GraphValidator",
    "InvariantChecker",
    "ValidationReport",
    "BomError",
    "AssemblyAlreadyExists",
    "AssemblyNotFound",
    "CycleDetected",
    "EmptyAssembly",
    "PartNotFound",
    "InsufficientQuantity",
    "InvalidQuantity",
]
