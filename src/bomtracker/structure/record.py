"""Quantified part list of a single named assembly."""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Tuple

from .errors import EmptyAssembly, InsufficientQuantity, InvalidQuantity, PartNotFound

MAX_PART_QUANTITY = 1000


class AssemblyRecord:
    """Named assembly holding ``part name -> quantity`` entries.

    Stored quantities always lie within ``[1, max_quantity]``; an entry that
    would drop to zero is removed instead of being stored.
    """

    __slots__ = ("_name", "_parts", "_max_quantity")

    def __init__(self, name: str, max_quantity: int = MAX_PART_QUANTITY) -> None:
        self._name = name
        self._parts: Dict[str, int] = {}
        self._max_quantity = max_quantity

    @classmethod
    def create(
        cls,
        name: str,
        initial_parts: Mapping[str, int],
        *,
        max_quantity: int = MAX_PART_QUANTITY,
    ) -> "AssemblyRecord":
        """Build a record from at least one part, each within the quantity bound."""

        if not initial_parts:
            raise EmptyAssembly(name)
        for part_name, quantity in initial_parts.items():
            if quantity > max_quantity or quantity < 1:
                raise InvalidQuantity(name, part_name, quantity)
        record = cls(name, max_quantity=max_quantity)
        record._parts.update(initial_parts)
        return record

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"AssemblyRecord(name={self._name!r}, parts={self._parts!r})"

    def __len__(self) -> int:
        return len(self._parts)

    def __contains__(self, part_name: object) -> bool:
        return part_name in self._parts

    def __iter__(self) -> Iterator[Tuple[str, int]]:
        return iter(self._parts.items())

    @property
    def name(self) -> str:
        return self._name

    @property
    def max_quantity(self) -> int:
        return self._max_quantity

    def is_empty(self) -> bool:
        return not self._parts

    def parts(self) -> Mapping[str, int]:
        """Read-only view of the part mapping."""

        return MappingProxyType(self._parts)

    def quantity_of(self, part_name: str) -> int:
        return self._parts.get(part_name, 0)

    def increase(self, part_name: str, amount: int) -> int:
        """Add ``amount`` units of ``part_name`` and return the new quantity."""

        new_quantity = self._parts.get(part_name, 0) + amount
        if new_quantity > self._max_quantity:
            raise InvalidQuantity(self._name, part_name, new_quantity)
        self._parts[part_name] = new_quantity
        return new_quantity

    def decrease(self, part_name: str, amount: int) -> int:
        """Remove ``amount`` units of ``part_name`` and return what is left.

        A part whose quantity reaches zero is dropped from the record.
        """

        if part_name not in self._parts:
            raise PartNotFound(self._name, part_name)
        new_quantity = self._parts[part_name] - amount
        if new_quantity < 0:
            raise InsufficientQuantity(part_name, amount, assembly_name=self._name)
        if new_quantity == 0:
            del self._parts[part_name]
        else:
            self._parts[part_name] = new_quantity
        return new_quantity


__all__ = ["AssemblyRecord", "MAX_PART_QUANTITY"]
