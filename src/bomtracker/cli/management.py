"""Configuration inspection commands for the bomtracker CLI."""

from __future__ import annotations

import typer
import yaml

from .common import CLIError, console, get_state, render_panel


def _config_command(
    ctx: typer.Context,
    *,
    output_format: str = typer.Option(
        "json",
        "--format",
        help="Settings rendering format (json or yaml).",
        case_sensitive=False,
    ),
) -> None:
    """Display the resolved configuration."""

    state = get_state(ctx)
    payload = state.settings.model_dump(mode="json")
    fmt = output_format.lower()
    if fmt == "json":
        render_panel("Resolved Settings", payload)
    elif fmt == "yaml":
        console.print(f"# Settings for environment {state.environment}")
        console.print(yaml.safe_dump(payload, sort_keys=False))
    else:
        raise CLIError("--format must be either 'json' or 'yaml'")
