"""In-memory product structure: assemblies, components and their invariants."""

from __future__ import annotations

from collections import defaultdict
from contextlib import contextmanager
from typing import Dict, Iterable, Iterator, List, Mapping, Set

from bomtracker.config.policies import StructurePolicy
from bomtracker.entities.core import AssemblyKind
from bomtracker.utils.logging import get_logger

from .errors import AssemblyAlreadyExists, AssemblyNotFound, BomError, CycleDetected
from .record import AssemblyRecord

_LOGGER = get_logger(module=__name__)


class ProductStructureGraph:
    """Collection of assembly records forming an acyclic part-of relation.

    Every name referenced as a part is either an *assembly* (it has a record
    of its own) or a *component* (an opaque leaf). The component set is a
    cache rebuilt after each successful mutation.
    """

    def __init__(self, policy: StructurePolicy | None = None) -> None:
        self._policy = policy or StructurePolicy()
        self._assemblies: Dict[str, AssemblyRecord] = {}
        self._components: Set[str] = set()

    # ------------------------------------------------------------------
    # Introspection helpers
    # ------------------------------------------------------------------
    def __contains__(self, name: object) -> bool:
        return name in self._assemblies

    def __len__(self) -> int:
        return len(self._assemblies)

    @property
    def policy(self) -> StructurePolicy:
        return self._policy

    def assemblies(self) -> List[str]:
        return sorted(self._assemblies)

    def components(self) -> List[str]:
        return sorted(self._components)

    def records(self) -> Iterator[AssemblyRecord]:
        for name in sorted(self._assemblies):
            yield self._assemblies[name]

    def is_assembly(self, name: str) -> bool:
        return name in self._assemblies

    def is_component(self, name: str) -> bool:
        return name in self._components

    def classify(self, name: str) -> AssemblyKind | None:
        """Return the classification of ``name`` or ``None`` when unreferenced."""

        if name in self._assemblies:
            return AssemblyKind.ASSEMBLY
        if name in self._components:
            return AssemblyKind.COMPONENT
        return None

    def get_assembly(self, name: str) -> AssemblyRecord:
        record = self._assemblies.get(name)
        if record is None:
            raise AssemblyNotFound(name)
        return record

    def users_of(self, name: str) -> List[str]:
        """Assemblies that list ``name`` as a direct part."""

        return sorted(
            record.name for record in self._assemblies.values() if name in record
        )

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def define_assembly(self, name: str, parts: Mapping[str, int]) -> AssemblyRecord:
        """Create a new assembly from an already de-duplicated part mapping."""

        with self._mutation("define_assembly", assembly=name, parts=len(parts)):
            if name in self._assemblies:
                raise AssemblyAlreadyExists(name)
            record = AssemblyRecord.create(
                name, parts, max_quantity=self._policy.max_part_quantity
            )
            trace = self._find_cycle(name, self._ordered_parts(record))
            if trace is not None:
                raise CycleDetected(name, trace)
            self._assemblies[name] = record
        return record

    def undefine_assembly(self, name: str) -> None:
        """Remove an assembly; remaining references to it become components."""

        with self._mutation("undefine_assembly", assembly=name):
            if name not in self._assemblies:
                raise AssemblyNotFound(name)
            del self._assemblies[name]
            _LOGGER.debug("Assembly undefined", assembly=name, demoted_in=self.users_of(name))

    def add_part(self, assembly_name: str, part_name: str, amount: int) -> int:
        """Add ``amount`` units of ``part_name`` and return the new quantity."""

        with self._mutation(
            "add_part", assembly=assembly_name, part=part_name, amount=amount
        ):
            record = self.get_assembly(assembly_name)
            trace = self._find_cycle(assembly_name, [part_name])
            if trace is not None:
                raise CycleDetected(assembly_name, trace, part_name=part_name)
            quantity = record.increase(part_name, amount)
        return quantity

    def remove_part(self, assembly_name: str, part_name: str, amount: int) -> int:
        """Remove ``amount`` units of ``part_name`` and return what is left.

        When the record runs out of parts the assembly itself is undefined.
        """

        with self._mutation(
            "remove_part", assembly=assembly_name, part=part_name, amount=amount
        ):
            record = self.get_assembly(assembly_name)
            remaining = record.decrease(part_name, amount)
            if record.is_empty():
                del self._assemblies[assembly_name]
                _LOGGER.debug(
                    "Assembly emptied and undefined",
                    assembly=assembly_name,
                    demoted_in=self.users_of(assembly_name),
                )
        return remaining

    @contextmanager
    def _mutation(self, operation: str, **context: object) -> Iterator[None]:
        try:
            yield
        except BomError as exc:
            _LOGGER.info("Mutation rejected", operation=operation, error=exc.kind, **context)
            raise
        self._refresh_components()
        _LOGGER.debug("Mutation applied", operation=operation, **context)

    def _refresh_components(self) -> None:
        components: Set[str] = set()
        for record in self._assemblies.values():
            for part_name in record.parts():
                if part_name not in self._assemblies:
                    components.add(part_name)
        self._components = components

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------
    def _ordered_parts(self, record: AssemblyRecord) -> List[str]:
        if self._policy.traversal_order == "insertion":
            return list(record.parts())
        return sorted(record.parts())

    def _find_cycle(self, origin: str, candidates: Iterable[str]) -> List[str] | None:
        """Depth-first search for a path from ``candidates`` back onto the trace.

        The trace starts at ``origin``. When a name already on the trace is
        reached again, the returned list starts at that name and ends with it.
        """

        trace: List[str] = [origin]
        on_trace: Set[str] = {origin}
        exhausted: Set[str] = set()
        frames: List[Iterator[str]] = [iter(list(candidates))]

        while frames:
            name = next(frames[-1], None)
            if name is None:
                frames.pop()
                finished = trace.pop()
                on_trace.discard(finished)
                exhausted.add(finished)
                continue
            if name in on_trace:
                start = trace.index(name)
                return trace[start:] + [name]
            if name in exhausted:
                continue
            record = self._assemblies.get(name)
            if record is None:
                continue
            trace.append(name)
            on_trace.add(name)
            frames.append(iter(self._ordered_parts(record)))
        return None

    def _post_order(self, roots: Iterable[str]) -> List[str]:
        """Defined assemblies reachable from ``roots``, each listed after its sub-assemblies.

        Uses an explicit stack so arbitrarily deep chains stay off the call
        stack. Names already entered are not expanded again.
        """

        order: List[str] = []
        entered: Set[str] = set()
        for root in roots:
            if root in entered or root not in self._assemblies:
                continue
            entered.add(root)
            frames = [(root, iter(list(self._assemblies[root].parts())))]
            while frames:
                name, children = frames[-1]
                child = next(children, None)
                if child is None:
                    frames.pop()
                    order.append(name)
                    continue
                if child in entered or child not in self._assemblies:
                    continue
                entered.add(child)
                frames.append((child, iter(list(self._assemblies[child].parts()))))
        return order

    def aggregate(self, root_name: str, kind: AssemblyKind | str) -> Dict[str, int]:
        """Multiplicity-weighted totals of every ``kind`` name below ``root_name``.

        Sub-assemblies are evaluated bottom-up, once each, so a part shared by
        several paths sums the contributions of all of them.
        """

        self.get_assembly(root_name)
        wanted = AssemblyKind(kind)
        totals_by_assembly: Dict[str, Dict[str, int]] = {}
        for name in self._post_order([root_name]):
            totals: Dict[str, int] = defaultdict(int)
            for part_name, quantity in self._assemblies[name]:
                nested = totals_by_assembly.get(part_name)
                if nested is not None:
                    for sub_name, count in nested.items():
                        totals[sub_name] += quantity * count
                if self.classify(part_name) is wanted:
                    totals[part_name] += quantity
            totals_by_assembly[name] = totals
        return dict(totals_by_assembly[root_name])

    # ------------------------------------------------------------------
    # Analytics
    # ------------------------------------------------------------------
    def statistics(self) -> Dict[str, int]:
        """Structural counts used by audit reports. Assumes an acyclic structure."""

        edge_count = sum(len(record) for record in self._assemblies.values())
        depths: Dict[str, int] = {}
        for name in self._post_order(sorted(self._assemblies)):
            depths[name] = 1 + max(
                (depths[part] for part in self._assemblies[name].parts() if part in depths),
                default=0,
            )

        return {
            "assembly_count": len(self._assemblies),
            "component_count": len(self._components),
            "edge_count": edge_count,
            "max_depth": max(depths.values(), default=0),
        }

    def adjacency(self) -> Dict[str, List[str]]:
        """Return ``assembly -> sorted direct part names``."""

        return {name: sorted(record.parts()) for name, record in sorted(self._assemblies.items())}


__all__ = ["ProductStructureGraph"]
