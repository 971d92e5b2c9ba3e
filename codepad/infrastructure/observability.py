"""Structured Logging — JSON formatter and setup for the workspace runtime.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (revision_id, command, message_type, listener, error_code)
      surfaced when present
    - JSON format by default, human-readable "text" format for local debugging

Design Decisions:
    - JSONFormatter over third-party libs: stdlib logging only
    - setup_logging called once by the runtime entry point
"""

import json
import logging
from datetime import datetime, timezone

_EXTRA_FIELDS = (
    "revision_id", "command", "message_type", "listener", "error_code",
)


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


_installed: logging.Handler | None = None


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Configure root logging. A repeated call replaces the earlier handler."""
    global _installed
    if _installed is not None:
        logging.root.removeHandler(_installed)
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    _installed = handler
    return handler
