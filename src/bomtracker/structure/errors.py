"""Exception classes raised by the product structure core.

Exception Hierarchy:
    BomError (base)
    ├── AssemblyAlreadyExists
    ├── AssemblyNotFound
    ├── EmptyAssembly
    ├── CycleDetected
    ├── PartNotFound
    ├── InsufficientQuantity
    └── InvalidQuantity

Every exception keeps the structured fields needed to build a diagnostic.
User-facing wording is produced by :mod:`bomtracker.commands.messages`.
"""

from __future__ import annotations

from typing import List, Sequence


class BomError(Exception):
    """Base exception for all product structure errors."""

    kind: str = "bom-error"


class AssemblyAlreadyExists(BomError):
    """Raised when defining an assembly whose name is already taken.

    Example:
        >>> raise AssemblyAlreadyExists("Bike")
        AssemblyAlreadyExists: Assembly 'Bike' already exists
    """

    kind = "assembly-exists"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Assembly '{name}' already exists")


class AssemblyNotFound(BomError):
    """Raised when an operation references an undefined assembly."""

    kind = "assembly-not-found"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Assembly '{name}' not found")


class EmptyAssembly(BomError):
    """Raised when an assembly would be defined without any parts."""

    kind = "empty-assembly"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Assembly '{name}' must list at least one part")


class CycleDetected(BomError):
    """Raised when a mutation would make an assembly contain itself.

    Args:
        origin_name: Assembly being defined or extended
        trace: Assembly names forming the cycle; first and last entries are equal
        part_name: Part being grafted, ``None`` when a whole assembly is defined
    """

    kind = "cycle-detected"

    def __init__(self, origin_name: str, trace: Sequence[str], part_name: str | None = None):
        self.origin_name = origin_name
        self.trace: List[str] = list(trace)
        self.part_name = part_name
        super().__init__(
            f"Assembly '{origin_name}' would create a cycle: {'-'.join(self.trace)}"
        )


class PartNotFound(BomError):
    """Raised when removing a part the assembly does not contain."""

    kind = "part-not-found"

    def __init__(self, assembly_name: str, part_name: str):
        self.assembly_name = assembly_name
        self.part_name = part_name
        super().__init__(f"Assembly '{assembly_name}' has no part '{part_name}'")


class InsufficientQuantity(BomError):
    """Raised when removing more units of a part than are stored."""

    kind = "insufficient-quantity"

    def __init__(self, part_name: str, requested_amount: int, assembly_name: str | None = None):
        self.part_name = part_name
        self.requested_amount = requested_amount
        self.assembly_name = assembly_name
        super().__init__(
            f"Cannot remove {requested_amount} of part '{part_name}': not enough stored"
        )


class InvalidQuantity(BomError):
    """Raised when a part quantity leaves the permitted range.

    ``amount`` is the resulting integer quantity, or the raw text when the
    command layer failed to parse it.
    """

    kind = "invalid-quantity"

    def __init__(self, assembly_name: str, part_name: str, amount: int | str):
        self.assembly_name = assembly_name
        self.part_name = part_name
        self.amount = amount
        super().__init__(
            f"Quantity {amount} of part '{part_name}' in assembly '{assembly_name}' is invalid"
        )


__all__ = [
    "BomError",
    "AssemblyAlreadyExists",
    "AssemblyNotFound",
    "EmptyAssembly",
    "CycleDetected",
    "PartNotFound",
    "InsufficientQuantity",
    "InvalidQuantity",
]
