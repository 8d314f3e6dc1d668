"""Logging setup shared by the apireadme command and library code."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "apireadme"
_CONSOLE_FORMAT = "[apireadme] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the apireadme hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


class DiagnosticFormatter(logging.Formatter):
    """Console formatter that prints catalog diagnostics as ``WARN path: ...`` lines.

    Records logged with ``extra={"diagnostic": ...}`` are rendered through the
    diagnostic's own ``str``; every other record uses the regular format.
    """

    def __init__(self) -> None:
        super().__init__(_CONSOLE_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        diagnostic = getattr(record, "diagnostic", None)
        if diagnostic is not None:
            return str(diagnostic)
        return super().format(record)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Point the apireadme logger at stderr and, optionally, ``log_file``.

    Calling this again replaces the previous handlers and closes them, so a
    log file opened by an earlier call is released.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(DiagnosticFormatter())
    logger.addHandler(console)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(file_handler)

    return logger


__all__ = ["DiagnosticFormatter", "configure_logging", "get_logger"]
