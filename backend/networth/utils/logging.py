# backend/networth/utils/logging.py
"""
Logging setup for the Net Worth Tracker.

One call at startup wires the root logger:
- Level and format come from settings (LOG_LEVEL, LOG_FORMAT) unless passed in
- "text" for a terminal, "json" for anything that ships logs elsewhere
- SQLAlchemy's engine/pool chatter is capped at WARNING

Usage:
    from networth.utils import setup_logging, get_logger

    setup_logging()                      # from settings
    setup_logging("DEBUG", "json")       # explicit

What gets logged where:
    DEBUG   - Baseline selection and zero-base guards in the calculators
    INFO    - Service construction, engine configuration, table creation
    WARNING - Inconsistent account rows read from the store
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from networth.config import settings

# =============================================================================
# CONSTANTS
# =============================================================================

# timestamp | level | logger | message
TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
TEXT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Capped at WARNING unless suppression is turned off
NOISY_LOGGERS = (
    "sqlalchemy.engine",
    "sqlalchemy.pool",
    "sqlalchemy.orm",
)

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# Attributes every LogRecord has; anything else arrived through extra={...}
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__
) | {"message", "asctime", "taskName"}


# =============================================================================
# JSON FORMATTER
# =============================================================================

class JsonFormatter(logging.Formatter):
    """
    One JSON object per line.

    {"timestamp": "...", "level": "DEBUG", "logger": "networth...",
     "message": "...", "extra": {"account_id": 3}}

    Values json cannot encode (Decimal, datetime) are written with str().
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        extra = _extra_fields(record)
        if extra:
            entry["extra"] = extra
        return json.dumps(entry)


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    fields: dict[str, Any] = {}
    for key, value in record.__dict__.items():
        if key in _RECORD_ATTRS:
            continue
        try:
            json.dumps(value)
        except (TypeError, ValueError):
            value = str(value)
        fields[key] = value
    return fields


# =============================================================================
# SETUP
# =============================================================================

def setup_logging(
        level: str | None = None,
        log_format: str | None = None,
        suppress_noisy_loggers: bool = True,
) -> None:
    """
    Configure the root logger with a single stdout handler.

    Calling it again replaces the previous handler.

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL. Defaults to settings.log_level.
        log_format: "text" or "json". Defaults to settings.log_format.
        suppress_noisy_loggers: Cap SQLAlchemy loggers at WARNING.

    Raises:
        ValueError: Unknown level or format
    """
    level_name = (level or settings.log_level).upper().strip()
    format_name = (log_format or settings.log_format).lower().strip()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(_build_formatter(format_name))

    root = logging.getLogger()
    root.setLevel(_get_log_level(level_name))
    root.handlers.clear()
    root.addHandler(handler)

    if suppress_noisy_loggers:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        f"Logging configured: level={level_name}, format={format_name}",
        extra={"log_level": level_name, "log_format": format_name},
    )


def _build_formatter(format_name: str) -> logging.Formatter:
    if format_name == "json":
        return JsonFormatter()
    if format_name == "text":
        return logging.Formatter(fmt=TEXT_FORMAT, datefmt=TEXT_DATE_FORMAT)
    raise ValueError(f"Invalid log format: '{format_name}'. Use 'text' or 'json'")


def _get_log_level(level_name: str) -> int:
    """
    Map a level name to its logging constant.

    Raises:
        ValueError: If the name is not a known level
    """
    try:
        return _LEVELS[level_name]
    except KeyError:
        raise ValueError(
            f"Invalid log level: '{level_name}'. Expected one of: {', '.join(_LEVELS)}"
        ) from None


def get_logger(name: str) -> logging.Logger:
    """Module logger; same as logging.getLogger(name)."""
    return logging.getLogger(name)
