"""Centralised logging configuration built on loguru."""

from __future__ import annotations

import sys
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

from loguru import logger

from ..config.settings import Settings, get_settings

_LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[session]}</cyan> | "
    "<magenta>{extra[step]}</magenta> | "
    "{name}:{function} | "
    "{message}"
)

_DEFAULT_EXTRA = {"session": "-", "step": "-"}


def configure_logging(
    settings: Settings | None = None,
    level: str | None = None,
    *,
    file_sink: bool = True,
) -> Path:
    """Route loguru output to stderr and the rotating session log.

    ``level`` overrides ``settings.log_level``. Returns the log file path.
    """

    cfg = settings or get_settings()
    resolved_level = (level or cfg.log_level).upper()

    logger.remove()
    logger.configure(extra=dict(_DEFAULT_EXTRA))
    logger.add(
        sys.stderr,
        level=resolved_level,
        format=_LOG_FORMAT,
        backtrace=False,
        diagnose=False,
    )

    log_path = cfg.log_file
    if file_sink:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path,
            level=resolved_level,
            format=_LOG_FORMAT,
            rotation="10 MB",
            retention="14 days",
            enqueue=True,
        )
    return log_path


def get_logger(**context: Any):
    """Return a logger bound to ``context`` (conventionally ``module=__name__``)."""

    return logger.bind(**context)


@contextmanager
def logging_context(**context: Any) -> Iterator[Any]:
    """Tag every record emitted inside the block, e.g. with the shell session."""

    with logger.contextualize(**context):
        yield logger


@contextmanager
def log_timing(step: str, *, logger_=logger) -> Iterator[None]:
    """Log how long the block took, in milliseconds."""

    started = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger_.info("Step finished", step=step, elapsed_ms=round(elapsed_ms, 3))


__all__ = ["configure_logging", "get_logger", "logging_context", "log_timing"]
