"""Logging utilities for gotrim commands."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "gotrim"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the gotrim hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def console_level(*, verbose: bool = False, quiet: bool = False) -> int:
    """Map the -v/-q flags to the level of the stderr handler.

    Formatting progress is INFO, so the default console only shows
    warnings. ``quiet`` leaves errors alone; stdout then carries nothing
    but formatted output and stderr nothing but failures.
    """
    if verbose and quiet:
        raise ValueError("verbose and quiet are mutually exclusive")
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.ERROR
    return logging.WARNING


def configure_logging(
    *, verbose: bool = False, quiet: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Configure the gotrim logger with stderr output and an optional file sink.

    The file sink always records at least INFO, so a batch run leaves a
    record of how many files were formatted and rewritten even when the
    console is quiet.
    """
    stream_level = console_level(verbose=verbose, quiet=quiet)
    file_level = min(stream_level, logging.INFO)
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(file_level if log_file is not None else stream_level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(stream_level)
    stream_handler.setFormatter(logging.Formatter("[gotrim] %(levelname)s %(message)s"))
    logger.addHandler(stream_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(file_level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


__all__ = ["configure_logging", "console_level", "get_logger"]
