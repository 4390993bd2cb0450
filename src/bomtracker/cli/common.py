"""Shared helpers used across the bomtracker CLI modules."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping
from uuid import uuid4

import typer
from rich.console import Console
from rich.panel import Panel

from bomtracker.config.policies import Policies
from bomtracker.config.settings import Settings, deep_merge
from bomtracker.utils.logging import configure_logging, get_logger

console = Console()
_LOGGER = get_logger(module=__name__)


class CLIError(RuntimeError):
    """Exception raised for user-facing CLI errors."""


@dataclass(slots=True)
class CLIState:
    """State object attached to ``typer.Context`` for downstream commands."""

    settings: Settings
    overrides: Dict[str, Any]
    environment: str
    session_id: str
    verbose: bool


def _known_override_roots() -> List[str]:
    roots = set(Settings.model_fields) | set(Policies.model_fields)
    roots.discard("policies")
    return sorted(roots)


def parse_override(argument: str) -> Dict[str, Any]:
    """Turn ``dotted.key=value`` into a nested mapping.

    The first segment must name a setting or a policy section, so a typo is
    rejected instead of being ignored. Values are JSON-decoded when possible.
    """

    dotted, separator, raw_value = argument.partition("=")
    if not separator:
        raise typer.BadParameter("Overrides must be expressed as dotted.key=value")
    segments = [segment.strip() for segment in dotted.split(".") if segment.strip()]
    if not segments:
        raise typer.BadParameter("Override keys must not be empty")
    roots = _known_override_roots()
    if segments[0] not in roots:
        raise typer.BadParameter(
            f"Unknown override root '{segments[0]}'; expected one of {', '.join(roots)}"
        )

    try:
        value: Any = json.loads(raw_value)
    except json.JSONDecodeError:
        value = raw_value
    for segment in reversed(segments):
        value = {segment: value}
    return value


def merge_overrides(overrides: Iterable[Dict[str, Any]]) -> Dict[str, Any]:
    """Deep-merge override mappings; later entries win."""

    result: Dict[str, Any] = {}
    for override in overrides:
        result = deep_merge(result, override)
    return result


def resolve_settings(environment: str | None, overrides: Dict[str, Any]) -> Settings:
    """Construct :class:`Settings` with environment and overrides applied."""

    payload = dict(overrides)
    if environment:
        payload["environment"] = environment
    try:
        return Settings(**payload)
    except ValueError as exc:
        raise CLIError(f"Invalid configuration: {exc}") from exc
    except OSError as exc:
        raise CLIError(f"Cannot prepare configured paths: {exc}") from exc


def configure_state(
    ctx: typer.Context,
    *,
    environment: str | None,
    overrides: Iterable[Dict[str, Any]],
    verbose: bool,
) -> None:
    """Populate ``ctx.obj`` with :class:`CLIState` and install log sinks."""

    merged = merge_overrides(overrides)
    settings = resolve_settings(environment, merged)
    configure_logging(settings, level="DEBUG" if verbose else None)
    ctx.obj = CLIState(
        settings=settings,
        overrides=merged,
        environment=settings.environment,
        session_id=f"cli-{uuid4().hex[:8]}",
        verbose=verbose,
    )
    _LOGGER.debug("CLI state configured", environment=settings.environment)


def get_state(ctx: typer.Context) -> CLIState:
    """Return the previously configured :class:`CLIState`.

    Commands must call this helper to access shared state; when the callback has
    not run an informative error is raised to guide developers.
    """

    if ctx.obj is None:
        raise CLIError("CLI context is not initialised")
    if not isinstance(ctx.obj, CLIState):  # pragma: no cover - defensive guard
        raise CLIError("Unexpected CLI context payload")
    return ctx.obj


def render_panel(title: str, content: Mapping[str, Any]) -> None:
    """Utility for rendering JSON-like mappings using Rich panels."""

    from rich.json import JSON as RichJSON

    console.print(Panel(RichJSON.from_data(content), title=title, border_style="cyan"))


def resolve_path(path: str | Path, *, must_exist: bool = True) -> Path:
    """Resolve a filesystem path, optionally requiring it to exist."""

    target = Path(path).expanduser().resolve()
    if must_exist and not target.exists():
        raise CLIError(f"Path does not exist: {target}")
    return target


__all__ = [
    "CLIError",
    "CLIState",
    "console",
    "configure_state",
    "get_state",
    "merge_overrides",
    "parse_override",
    "render_panel",
    "resolve_path",
    "resolve_settings",
]
