"""Structured JSON logging for slackify.

Each record is written as one JSON object per line::

    {"ts": "2026-10-18T09:12:44.501233+00:00", "level": "DEBUG",
     "logger": "slackify.converter", "message": "conversion complete",
     "blocks": 4, "warnings": 0}

Structured fields are passed through ``extra={"extra_fields": {...}}``::

    from slackify.observability import get_logger

    log = get_logger("slackify.converter")
    log.debug("token skipped", extra={"extra_fields": {"token_type": "footnotes"}})
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any


class StructuredFormatter(logging.Formatter):
    """Format log records as single-line JSON objects.

    Guaranteed keys are ``ts`` (ISO-8601 UTC), ``level``, ``logger`` and
    ``message``.  Fields found in ``record.extra_fields`` are merged into
    the top-level object, and ``exception`` is added when the record
    carries exception info.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extra_fields: dict[str, Any] | None = getattr(record, "extra_fields", None)
        if extra_fields is not None:
            entry.update(extra_fields)

        if record.exc_info and record.exc_info[1] is not None:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str, ensure_ascii=False)


# One handler per logger name so repeated get_logger() calls never stack
# duplicate handlers.
_configured_loggers: set[str] = set()


def get_logger(
    name: str = "slackify",
    *,
    level: int | str = logging.WARNING,
    stream: Any | None = None,
) -> logging.Logger:
    """Get or create a structured JSON logger.

    Parameters
    ----------
    name:
        Logger name.  Child names such as ``"slackify.converter"`` are
        configured independently.
    level:
        Minimum level, as an ``int`` or a case-insensitive name.  Only
        applied the first time *name* is configured.
    stream:
        Output stream for the handler.  Defaults to ``sys.stderr``.

    Returns
    -------
    logging.Logger
        The configured logger.  Repeated calls return the same instance.
    """
    logger = logging.getLogger(name)

    if name not in _configured_loggers:
        resolved_level = (
            logging.getLevelName(level.upper())
            if isinstance(level, str)
            else level
        )
        logger.setLevel(resolved_level)

        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)
        logger.propagate = False

        _configured_loggers.add(name)

    return logger
