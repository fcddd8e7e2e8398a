"""Logger hierarchy, severity levels and handler setup for componentlens."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Dict, Optional, TextIO

ROOT_LOGGER = "componentlens"

# ErrorTracker severities mapped onto logging levels.
SEVERITY_LEVELS: Dict[str, int] = {
    "low": logging.INFO,
    "medium": logging.WARNING,
    "high": logging.ERROR,
    "critical": logging.CRITICAL,
}

_HANDLER_MARK = "_componentlens_handler"


class _ComponentFormatter(logging.Formatter):
    """Prints the component (``scanner``, ``analyzer`` ...) instead of the full logger name."""

    def format(self, record: logging.LogRecord) -> str:
        record.component = record.name.removeprefix(f"{ROOT_LOGGER}.") if record.name != ROOT_LOGGER else "-"
        return super().format(record)


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``componentlens.<name>``, or the package logger itself."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}" if name else ROOT_LOGGER)


def level_for_severity(severity: str) -> int:
    return SEVERITY_LEVELS.get(severity, logging.WARNING)


def configure_logging(
    *,
    verbose: bool = False,
    level: Optional[int] = None,
    stream: Optional[TextIO] = None,
    log_file: Path | None = None,
) -> logging.Logger:
    """Install console (and optional file) handlers on the package logger.

    ``level`` wins over ``verbose``. Console output goes to ``stream``, or
    stderr, so JSON on stdout stays parseable. Calling this again replaces
    the handlers it installed earlier and leaves foreign handlers alone.
    """
    effective = level if level is not None else (logging.DEBUG if verbose else logging.INFO)
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(effective)
    logger.propagate = False

    for handler in list(logger.handlers):
        if getattr(handler, _HANDLER_MARK, False):
            logger.removeHandler(handler)
            handler.close()

    console = logging.StreamHandler(stream if stream is not None else sys.stderr)
    console.setFormatter(_ComponentFormatter("[componentlens] %(levelname)s %(component)s: %(message)s"))
    _install(logger, console, effective)

    if log_file is not None:
        sink = logging.FileHandler(log_file, encoding="utf-8")
        sink.setFormatter(_ComponentFormatter("%(asctime)s %(levelname)s %(component)s: %(message)s"))
        _install(logger, sink, effective)

    return logger


def _install(logger: logging.Logger, handler: logging.Handler, level: int) -> None:
    handler.setLevel(level)
    setattr(handler, _HANDLER_MARK, True)
    logger.addHandler(handler)


__all__ = ["ROOT_LOGGER", "SEVERITY_LEVELS", "configure_logging", "get_logger", "level_for_severity"]
