"""Execution of parsed commands against a product structure graph."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, Iterator, List, Tuple

from bomtracker.config.policies import ShellPolicy
from bomtracker.entities.core import (
    AssemblyKind,
    PartEntry,
    sorted_by_name,
    sorted_by_quantity,
)
from bomtracker.structure.errors import BomError
from bomtracker.structure.graph import ProductStructureGraph
from bomtracker.utils.logging import get_logger

from .messages import describe_error
from .parser import (
    AddPart,
    Command,
    DefineAssembly,
    InputError,
    ListAssemblies,
    ListComponents,
    Quit,
    RemovePart,
    ShowAssembly,
    UndefineAssembly,
    parse_command,
)

_LOGGER = get_logger(module=__name__)

ENTRY_SEPARATOR = ";"
AMOUNT_SEPARATOR = ":"


def format_entries(entries: Iterable[PartEntry]) -> str:
    """Render entries as ``name:quantity;name:quantity``."""

    return ENTRY_SEPARATOR.join(
        f"{entry.name}{AMOUNT_SEPARATOR}{entry.quantity}" for entry in entries
    )


@dataclass(slots=True)
class CommandOutcome:
    """Result of executing one command line."""

    lines: List[str] = field(default_factory=list)
    error: str | None = None
    quit: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None


class CommandInterpreter:
    """Maps commands onto :class:`ProductStructureGraph` operations."""

    def __init__(
        self,
        graph: ProductStructureGraph | None = None,
        policy: ShellPolicy | None = None,
    ) -> None:
        self._graph = graph if graph is not None else ProductStructureGraph()
        self._policy = policy or ShellPolicy()
        self._handlers: Dict[type, Callable[..., CommandOutcome]] = {
            DefineAssembly: self._define_assembly,
            UndefineAssembly: self._undefine_assembly,
            ShowAssembly: self._show_assembly,
            ListAssemblies: self._list_assemblies,
            ListComponents: self._list_components,
            AddPart: self._add_part,
            RemovePart: self._remove_part,
            Quit: self._quit,
        }

    @property
    def graph(self) -> ProductStructureGraph:
        return self._graph

    def execute_line(self, line: str) -> CommandOutcome:
        """Parse and execute ``line``; failures become error outcomes."""

        try:
            return self.execute(parse_command(line))
        except InputError as exc:
            _LOGGER.info("Rejected command input", error=type(exc).__name__)
            return CommandOutcome(error=describe_error(exc))
        except BomError as exc:
            return CommandOutcome(error=describe_error(exc))

    def execute(self, command: Command) -> CommandOutcome:
        """Execute a parsed command, raising core errors to the caller."""

        handler = self._handlers[type(command)]
        return handler(command)

    def run(self, lines: Iterable[str]) -> Iterator[Tuple[str, CommandOutcome]]:
        """Execute ``lines`` in order, stopping after a quit command."""

        for raw in lines:
            line = raw.rstrip("\r\n")
            outcome = self.execute_line(line)
            yield line, outcome
            if outcome.quit:
                return

    def _success(self) -> CommandOutcome:
        return CommandOutcome(lines=[self._policy.success_message])

    def _define_assembly(self, command: DefineAssembly) -> CommandOutcome:
        self._graph.define_assembly(command.name, command.parts)
        return self._success()

    def _undefine_assembly(self, command: UndefineAssembly) -> CommandOutcome:
        self._graph.undefine_assembly(command.name)
        return self._success()

    def _add_part(self, command: AddPart) -> CommandOutcome:
        self._graph.add_part(command.assembly_name, command.part_name, command.amount)
        return self._success()

    def _remove_part(self, command: RemovePart) -> CommandOutcome:
        self._graph.remove_part(command.assembly_name, command.part_name, command.amount)
        return self._success()

    def _show_assembly(self, command: ShowAssembly) -> CommandOutcome:
        if self._graph.is_component(command.name):
            return CommandOutcome(lines=[self._policy.component_marker])
        record = self._graph.get_assembly(command.name)
        return CommandOutcome(lines=[format_entries(sorted_by_name(record.parts()))])

    def _list_assemblies(self, command: ListAssemblies) -> CommandOutcome:
        counts = self._graph.aggregate(command.name, AssemblyKind.ASSEMBLY)
        if not counts:
            return CommandOutcome(lines=[self._policy.empty_marker])
        return CommandOutcome(lines=[format_entries(sorted_by_quantity(counts))])

    def _list_components(self, command: ListComponents) -> CommandOutcome:
        counts = self._graph.aggregate(command.name, AssemblyKind.COMPONENT)
        return CommandOutcome(lines=[format_entries(sorted_by_quantity(counts))])

    def _quit(self, command: Quit) -> CommandOutcome:
        return CommandOutcome(quit=True)


__all__ = ["CommandInterpreter", "CommandOutcome", "format_entries"]
