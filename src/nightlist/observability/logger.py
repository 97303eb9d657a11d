"""JSON log lines for nightlist.

Each record becomes one JSON object on one line.  Structured fields ride
along in ``extra={"extra_fields": {...}}`` and are merged into the object::

    log = get_logger("nightlist.adapter")
    log.debug("list submitted", extra={"extra_fields": {"size": 3}})

    {"ts": "2026-10-18T12:00:00.123456+00:00", "level": "DEBUG",
     "logger": "nightlist.adapter", "message": "list submitted", "size": 3}

The library loggers (``nightlist.diff``, ``nightlist.adapter``,
``nightlist.tracker``) start at ``WARNING``; raise them with
``logging.getLogger(name).setLevel(...)`` to see per-call summaries.
"""

from __future__ import annotations

import json
import logging
import sys
import threading
from datetime import datetime, timezone
from typing import Any, TextIO


class StructuredFormatter(logging.Formatter):
    """Render a record as a JSON line.

    Keys: ``ts`` (UTC, ISO-8601, taken from the record's creation time),
    ``level``, ``logger``, ``message``, then any ``extra_fields`` and, for
    records logged with ``exc_info``, ``exception``.  Values JSON cannot
    encode are written with ``str()``.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(getattr(record, "extra_fields", None) or {})
        if record.exc_info and record.exc_info[1] is not None:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


_handled: set[str] = set()
_handled_lock = threading.Lock()


def get_logger(
    name: str = "nightlist",
    *,
    level: int | str = logging.WARNING,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Return logger *name* with a JSON handler attached on first use.

    *level* (a number or a name such as ``"debug"``) and *stream*
    (``sys.stderr`` by default) only apply to that first call; later calls
    hand back the same logger untouched.  The logger does not propagate,
    so records are not printed twice when the root logger has handlers.
    """
    logger = logging.getLogger(name)
    with _handled_lock:
        if name in _handled:
            return logger
        _handled.add(name)

    logger.setLevel(level.upper() if isinstance(level, str) else level)
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(StructuredFormatter())
    logger.addHandler(handler)
    logger.propagate = False
    return logger
