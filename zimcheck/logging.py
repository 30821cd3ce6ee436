"""Logging utilities for zimcheck commands."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

_LOGGER_NAME = "zimcheck"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the zimcheck hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, quiet: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Send zimcheck progress records to stderr, keeping stdout for the report.

    ``quiet`` limits console output to warnings; ``verbose`` wins when both
    are set. The optional file sink always records at the console level.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Reset handlers to avoid duplicate output when the CLI is invoked multiple times.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(logging.Formatter("[zimcheck] %(levelname)s %(message)s"))
    logger.addHandler(console)

    if log_file is not None:
        sink = logging.FileHandler(log_file, encoding="utf-8")
        sink.setLevel(level)
        sink.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        logger.addHandler(sink)

    return logger


__all__ = ["configure_logging", "get_logger"]
