"""Logging utilities for docsonnet."""

from __future__ import annotations

import logging
from pathlib import Path

from .errors import KeyPath, format_path

_LOGGER_NAME = "docsonnet"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the docsonnet hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Configure the docsonnet logger with console output and optional file sink."""
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Reset handlers to avoid duplicate output when the CLI runs more than once per process.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(logging.Formatter("[docsonnet] %(levelname)s %(message)s"))
    logger.addHandler(stream_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


def log_diagnostic(logger: logging.Logger, path: KeyPath, message: str) -> None:
    """Log a non-fatal decode condition, keeping its key path on the record as ``key_path``."""
    logger.warning("%s: %s", format_path(path), message, extra={"key_path": tuple(path)})


__all__ = ["configure_logging", "get_logger", "log_diagnostic"]
