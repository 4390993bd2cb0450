"""Run the bomtracker CLI from a source checkout: ``python main.py shell``."""

from __future__ import annotations

from typing import Iterable

from bomtracker.cli.main import app


def main(argv: Iterable[str] | None = None) -> int:
    """Invoke the Typer application and return its exit status."""

    args = list(argv) if argv is not None else None
    try:
        app(prog_name="bomtracker", args=args)
    except SystemExit as exc:
        if exc.code is None or isinstance(exc.code, int):
            return exc.code or 0
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
