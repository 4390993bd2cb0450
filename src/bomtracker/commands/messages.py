"""User-facing diagnostics for core and input errors."""

from __future__ import annotations

from bomtracker.structure.errors import (
    AssemblyAlreadyExists,
    AssemblyNotFound,
    CycleDetected,
    EmptyAssembly,
    InsufficientQuantity,
    InvalidQuantity,
    PartNotFound,
)

from .parser import (
    DuplicateParts,
    InvalidInstruction,
    InvalidParameters,
    UnexpectedParameters,
)

TRACE_SEPARATOR = "-"


def describe_error(error: Exception) -> str:
    """Render an error raised by the core or the parser as a single line."""

    if isinstance(error, CycleDetected):
        trace = TRACE_SEPARATOR.join(error.trace)
        if error.part_name is None:
            return (
                f"the specified BOM {error.origin_name} would create a cycle "
                f"in the product structure: {trace}"
            )
        return (
            f"adding the part {error.part_name} to the BOM {error.origin_name} "
            f"would create a cycle in the structure: {trace}"
        )
    if isinstance(error, AssemblyAlreadyExists):
        return f"a BOM named {error.name} already exists in the system"
    if isinstance(error, EmptyAssembly):
        return f"the BOM {error.name} must contain at least one part"
    if isinstance(error, AssemblyNotFound):
        return f"no BOM exists in the system for the specified name: {error.name}"
    if isinstance(error, PartNotFound):
        return f"the BOM {error.assembly_name} does not contain the specified part: {error.part_name}"
    if isinstance(error, InsufficientQuantity):
        return (
            f"the BOM {error.assembly_name} does not contain the part {error.part_name} "
            f"in the specified amount: {error.requested_amount}"
        )
    if isinstance(error, InvalidQuantity):
        return (
            f"the amount for the component {error.part_name} in the BOM "
            f"{error.assembly_name} is too high: {error.amount}"
        )
    if isinstance(error, DuplicateParts):
        return (
            f"the names of the parts in the specified BOM {error.assembly_name} "
            f"appear twice: {','.join(error.part_names)}"
        )
    if isinstance(error, InvalidInstruction):
        return f"{error.instruction} is not a valid instruction"
    if isinstance(error, InvalidParameters):
        return f"invalid parameters. Usage: {error.usage}"
    if isinstance(error, UnexpectedParameters):
        return (
            f"incorrect input format, the {error.instruction} command does not accept "
            f"any parameters: {error.params}"
        )
    return str(error)


__all__ = ["describe_error", "TRACE_SEPARATOR"]
