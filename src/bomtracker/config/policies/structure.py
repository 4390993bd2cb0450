"""Product structure policy models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class StructurePolicy(BaseModel):
    """Configuration controlling the product structure invariants."""

    max_part_quantity: int = Field(
        default=1000,
        ge=1,
        description="Largest quantity a single part entry may hold.",
    )
    traversal_order: Literal["lexicographic", "insertion"] = Field(
        default="lexicographic",
        description=(
            "Order in which direct parts are visited by the cycle search; decides "
            "which cycle is reported when several exist."
        ),
    )
