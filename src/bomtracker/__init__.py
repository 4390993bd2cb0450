"""Top-level package for the bill-of-materials tracker."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("bomtracker")
except PackageNotFoundError:  # pragma: no cover - running from a source checkout
    __version__ = "0.1.0"

from .config.settings import Settings, get_settings
from .entities import AssemblyKind, PartEntry
from .structure import (
    AssemblyAlreadyExists,
    AssemblyNotFound,
    AssemblyRecord,
    BomError,
    CycleDetected,
    EmptyAssembly,
    InsufficientQuantity,
    InvalidQuantity,
    PartNotFound,
    ProductStructureGraph,
)

__all__ = [
    "__version__",
    "Settings",
    "get_settings",
    "AssemblyKind",
    "PartEntry",
    "AssemblyRecord",
    "ProductStructureGraph",
    "BomError",
    "AssemblyAlreadyExists",
    "AssemblyNotFound",
    "CycleDetected",
    "EmptyAssembly",
    "PartNotFound",
    "InsufficientQuantity",
    "InvalidQuantity",
]
