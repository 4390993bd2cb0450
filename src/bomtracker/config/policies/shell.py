"""Command shell presentation policy."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ShellPolicy(BaseModel):
    """Markers printed by the line-oriented command shell."""

    success_message: str = Field(default="OK", min_length=1)
    component_marker: str = Field(default="COMPONENT", min_length=1)
    empty_marker: str = Field(default="EMPTY", min_length=1)
    echo_commands: bool = Field(
        default=False,
        description="Prefix each replayed command with '> ' before its output.",
    )
