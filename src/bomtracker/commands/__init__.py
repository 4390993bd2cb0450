"""Line-oriented command adapter over the product structure."""

from __future__ import annotations

from .interpreter import CommandInterpreter, CommandOutcome, format_entries
from .messages import describe_error
from .parser import (
    COMMANDS,
    DuplicateParts,
    InputError,
    InvalidInstruction,
    InvalidParameters,
    UnexpectedParameters,
    parse_command,
)

__all__ = [
    "COMMANDS",
    "CommandInterpreter",
    "CommandOutcome",
    "format_entries",
    "describe_error",
    "parse_command",
    "InputError",
    "InvalidInstruction",
    "InvalidParameters",
    "UnexpectedParameters",
    "DuplicateParts",
]
