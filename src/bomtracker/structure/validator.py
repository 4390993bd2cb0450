"""Invariant audit helpers for the product structure."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List

from bomtracker.utils.logging import get_logger

from .graph import ProductStructureGraph


@dataclass(slots=True)
class ValidationReport:
    """Structured audit output for reports and tests."""

    passed: bool
    violations: List[dict] = field(default_factory=list)
    graph_stats: dict = field(default_factory=dict)
    proofs: dict = field(default_factory=dict)
    generated_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )

    def to_dict(self) -> dict:
        return {
            "passed": self.passed,
            "violations": list(self.violations),
            "graph_stats": dict(self.graph_stats),
            "proofs": dict(self.proofs),
            "generated_at": self.generated_at,
        }


class InvariantChecker:
    """Checks the structural invariants of a :class:`ProductStructureGraph`."""

    def prove_acyclicity(self, graph: ProductStructureGraph) -> dict:
        """Return a topological ordering of the assemblies or raise on a cycle."""

        adjacency = graph.adjacency()
        in_degree: Dict[str, int] = {name: 0 for name in adjacency}
        for parts in adjacency.values():
            for part in parts:
                if part in in_degree:
                    in_degree[part] += 1

        queue = deque(sorted(name for name, degree in in_degree.items() if degree == 0))
        ordering: List[str] = []
        while queue:
            name = queue.popleft()
            ordering.append(name)
            for part in adjacency[name]:
                if part not in in_degree:
                    continue
                in_degree[part] -= 1
                if in_degree[part] == 0:
                    queue.append(part)

        if len(ordering) != len(adjacency):
            stuck = sorted(name for name, degree in in_degree.items() if degree > 0)
            raise ValueError(f"product structure contains a cycle among {stuck}")
        return {"valid": True, "topological_order": ordering}

    def validate_quantities(self, graph: ProductStructureGraph) -> List[dict]:
        violations: List[dict] = []
        limit = graph.policy.max_part_quantity
        for record in graph.records():
            for part_name, quantity in record:
                if not 1 <= quantity <= limit:
                    violations.append(
                        {
                            "code": "quantity-out-of-range",
                            "assembly": record.name,
                            "part": part_name,
                            "detail": f"quantity {quantity} outside [1, {limit}]",
                        }
                    )
            if record.is_empty():
                violations.append(
                    {
                        "code": "empty-assembly",
                        "assembly": record.name,
                        "detail": "defined assemblies must list at least one part",
                    }
                )
        return violations

    def validate_classification(self, graph: ProductStructureGraph) -> List[dict]:
        expected = {
            part
            for parts in graph.adjacency().values()
            for part in parts
            if not graph.is_assembly(part)
        }
        actual = set(graph.components())
        violations: List[dict] = []
        for name in sorted(expected - actual):
            violations.append(
                {"code": "missing-component", "part": name, "detail": "part is not classified"}
            )
        for name in sorted(actual - expected):
            violations.append(
                {"code": "stale-component", "part": name, "detail": "component is not referenced"}
            )
        for name in sorted(actual & set(graph.assemblies())):
            violations.append(
                {"code": "ambiguous-classification", "part": name, "detail": "both assembly and component"}
            )
        return violations


class GraphValidator:
    """Combines the invariant checks into a single report."""

    def __init__(self, checker: InvariantChecker | None = None) -> None:
        self._checker = checker or InvariantChecker()
        self._logger = get_logger(module=f"{__name__}.GraphValidator")

    def run(self, graph: ProductStructureGraph) -> ValidationReport:
        violations: List[dict] = []
        violations.extend(self._checker.validate_quantities(graph))
        violations.extend(self._checker.validate_classification(graph))

        proofs: dict = {}
        try:
            proofs["acyclicity"] = self._checker.prove_acyclicity(graph)
        except ValueError as exc:
            violations.append({"code": "cycle-detected", "detail": str(exc)})
            proofs["acyclicity"] = {"valid": False, "detail": str(exc)}

        # depth statistics are only defined for an acyclic structure
        acyclic = proofs["acyclicity"]["valid"]
        report = ValidationReport(
            passed=not violations,
            violations=violations,
            graph_stats=graph.statistics() if acyclic else {},
            proofs=proofs,
        )
        self._logger.info(
            "Structure audit completed",
            passed=report.passed,
            violations=len(report.violations),
        )
        return report


__all__ = ["GraphValidator", "InvariantChecker", "ValidationReport"]
