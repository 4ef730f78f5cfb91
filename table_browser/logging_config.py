from __future__ import annotations

import logging
import os
from typing import Optional

from pythonjsonlogger import jsonlogger

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Per-request access lines from the Dash dev server drown out the app's own logs
_NOISY_LOGGERS = ("werkzeug",)


def _resolve_level(level: Optional[int]) -> int:
    if level is not None:
        return level
    name = os.getenv("TABLE_BROWSER_LOG_LEVEL", "INFO").upper()
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else logging.INFO


def build_formatter(format_mode: str) -> logging.Formatter:
    """JSON records (python-json-logger) unless plain text is asked for."""
    if format_mode == "plain":
        return logging.Formatter(LOG_FORMAT)
    return jsonlogger.JsonFormatter(LOG_FORMAT)


def configure_logging(
        level: Optional[int] = None,
        force_format: Optional[str] = None,
) -> None:
    """
    Install a single root handler for the table browser.

    Format, first match wins:
        1) force_format ("json" or "plain")
        2) env var TABLE_BROWSER_LOG_FORMAT
        3) "json"

    Level: `level` if given, else env var TABLE_BROWSER_LOG_LEVEL, else INFO.
    Structured fields passed through `extra={...}` end up as JSON keys.
    """
    format_mode = (force_format or os.getenv("TABLE_BROWSER_LOG_FORMAT", "json")).lower()

    root = logging.getLogger()
    root.setLevel(_resolve_level(level))

    handler = logging.StreamHandler()
    handler.setFormatter(build_formatter(format_mode))

    # Replace any existing handlers to avoid duplicate logs
    root.handlers.clear()
    root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(logging.WARNING, root.level))
