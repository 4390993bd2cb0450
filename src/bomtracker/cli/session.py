"""Interactive and scripted command sessions."""

from __future__ import annotations

import sys
from typing import Iterable

import typer

from bomtracker.commands import CommandInterpreter
from bomtracker.structure import GraphValidator, ProductStructureGraph
from bomtracker.utils.logging import log_timing, logging_context

from .common import CLIError, CLIState, get_state, render_panel, resolve_path


def build_interpreter(state: CLIState) -> CommandInterpreter:
    policies = state.settings.policies
    graph = ProductStructureGraph(policies.structure)
    return CommandInterpreter(graph, policies.shell)


def drive(interpreter: CommandInterpreter, lines: Iterable[str], *, echo: bool) -> int:
    """Feed ``lines`` to ``interpreter`` and print results; return the error count."""

    failures = 0
    for line, outcome in interpreter.run(lines):
        if echo:
            typer.echo(f"> {line}")
        for text in outcome.lines:
            typer.echo(text)
        if outcome.error is not None:
            failures += 1
            typer.echo(outcome.error, err=True)
    return failures


def _shell_command(ctx: typer.Context) -> None:
    """Read commands from standard input until ``quit`` or end of input."""

    state = get_state(ctx)
    interpreter = build_interpreter(state)
    with logging_context(session=state.session_id, step="shell"):
        drive(interpreter, sys.stdin, echo=False)


def _run_command(
    ctx: typer.Context,
    script: str = typer.Argument(..., help="File with one command per line."),
    *,
    echo: bool = typer.Option(
        False, "--echo", help="Print each command prefixed with '> ' before its output."
    ),
    audit: bool = typer.Option(
        False, "--audit", help="Validate structural invariants after the script finishes."
    ),
    strict: bool = typer.Option(
        False, "--strict", help="Exit with status 1 when any command fails."
    ),
) -> None:
    """Replay a command script against a fresh product structure."""

    state = get_state(ctx)
    path = resolve_path(script)
    if not path.is_file():
        raise CLIError(f"Script is not a file: {path}")

    interpreter = build_interpreter(state)
    echo = echo or state.settings.policies.shell.echo_commands
    with logging_context(session=state.session_id, step="run"):
        with log_timing("run-script"):
            with path.open("r", encoding="utf-8") as handle:
                failures = drive(interpreter, handle, echo=echo)

        if audit:
            report = GraphValidator().run(interpreter.graph)
            render_panel("Structure Audit", report.to_dict())
            if not report.passed:
                raise typer.Exit(code=1)

    if strict and failures:
        raise typer.Exit(code=1)


__all__ = ["build_interpreter", "drive"]
