"""
logs.py — Logging Setup & Run Log
==================================
`get_logger(name)` configures a logger once (stream handler, INFO).

`RunLogHandler` is the backing store for the "recent activity" panel:
a logging.Handler that keeps only the last `capacity` records as plain
dicts.  Attach it to the "engine" logger and every Recorder / Stepper
event shows up there.

    log = RunLogHandler(capacity=5)
    logging.getLogger("engine").addHandler(log)
    …
    log.entries()   →  [{"message": …, "level": "info", "timestamp": …}, …]

A record logged with `extra={"success": True}` is tagged "success"
instead of its level name, so the panel can colour found / sorted /
complete events differently from plain info.
"""

import logging
from collections import deque
from typing import Any, Deque, Dict, List


LOG_FORMAT       = "%(asctime)s - %(levelname)s - %(message)s"
DEFAULT_CAPACITY = 5

_LEVEL_TAGS = {
    logging.DEBUG:    "info",
    logging.INFO:     "info",
    logging.WARNING:  "warning",
    logging.ERROR:    "error",
    logging.CRITICAL: "error",
}


def get_logger(name: str) -> logging.Logger:
    """Return configured logger."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler   = logging.StreamHandler()
        formatter = logging.Formatter(LOG_FORMAT)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    return logger


class RunLogHandler(logging.Handler):
    """Bounded in-memory handler; oldest entries fall off the front."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY, level: int = logging.INFO):
        super().__init__(level)
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity!r}")
        self.capacity = capacity
        self._entries: Deque[Dict[str, Any]] = deque(maxlen=capacity)

    def emit(self, record: logging.LogRecord) -> None:
        tag = "success" if getattr(record, "success", False) else _LEVEL_TAGS.get(record.levelno, "info")
        self._entries.append({
            "message":   record.getMessage(),
            "level":     tag,
            "timestamp": record.created,
        })

    def entries(self) -> List[Dict[str, Any]]:
        return list(self._entries)

    def clear(self) -> None:
        self._entries.clear()
