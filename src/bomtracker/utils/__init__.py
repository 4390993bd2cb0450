"""Shared utilities for the bill-of-materials tracker."""

from .logging import configure_logging, get_logger, log_timing, logging_context

__all__ = ["configure_logging", "get_logger", "log_timing", "logging_context"]
