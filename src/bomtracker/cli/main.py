"""Primary Typer application wiring the bomtracker CLI."""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

import typer
from rich.table import Table

from . import management, session
from .common import CLIError, CLIState, configure_state, console, parse_override

ErrorHandler = Callable[[BaseException], int]


class BomTyper(typer.Typer):
    """Typer application that turns registered exceptions into exit codes.

    Handlers are looked up along the exception's MRO, so a handler registered
    for a base class also covers its subclasses.
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._error_handlers: Dict[type, ErrorHandler] = {}

    def error_handler(self, exception_type: type) -> Callable[[ErrorHandler], ErrorHandler]:
        def register(handler: ErrorHandler) -> ErrorHandler:
            self._error_handlers[exception_type] = handler
            return handler

        return register

    def _handler_for(self, exc: BaseException) -> ErrorHandler | None:
        for klass in type(exc).__mro__:
            handler = self._error_handlers.get(klass)
            if handler is not None:
                return handler
        return None

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        try:
            return super().__call__(*args, **kwargs)
        except Exception as exc:  # pragma: no cover - console script surface
            handler = self._handler_for(exc)
            if handler is None:
                raise
            raise SystemExit(handler(exc)) from exc


app = BomTyper(
    add_completion=False,
    help=(
        "Define bills of materials, edit their part quantities, and query "
        "aggregated sub-assemblies and components from a line-oriented shell."
    ),
    no_args_is_help=True,
)


@app.error_handler(CLIError)
def handle_cli_error(exception: BaseException) -> int:
    """Print ``CLIError`` messages without a traceback."""

    console.print(f"[bold red]Error:[/bold red] {exception}")
    return 2


def _print_context(state: CLIState) -> None:
    table = Table(title="bomtracker", show_header=False, box=None)
    table.add_row("Environment", state.environment)
    table.add_row("Session", state.session_id)
    table.add_row("Log level", state.settings.log_level)
    table.add_row("Log file", str(state.settings.log_file))
    table.add_row("Quantity bound", str(state.settings.policies.structure.max_part_quantity))
    if state.overrides:
        table.add_row("Overrides", ", ".join(sorted(state.overrides)))
    console.print(table)


@app.callback()
def main(
    ctx: typer.Context,
    environment: Optional[str] = typer.Option(
        None,
        "--environment",
        "-e",
        help="Configuration environment (development, testing, production).",
        show_default=False,
    ),
    override: List[str] = typer.Option(  # noqa: B008 - Typer callback signature
        [],
        "--override",
        "-o",
        metavar="KEY=VALUE",
        help="Setting or policy override such as structure.max_part_quantity=50 (repeatable).",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log at DEBUG level and print the resolved session context.",
    ),
) -> None:
    """Resolve settings and logging before any subcommand runs."""

    overrides = [parse_override(item) for item in override]
    configure_state(ctx, environment=environment, overrides=overrides, verbose=verbose)
    if verbose:
        _print_context(ctx.obj)


app.command("shell")(session._shell_command)
app.command("run")(session._run_command)
app.command("config")(management._config_command)
