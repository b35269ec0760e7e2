"""
Process-wide logging setup shared by the API and the terminal front end.

Two formats are supported:
  text: ``%(asctime)s %(levelname)s %(name)s %(message)s``
  json: one JSON object per line, suitable for log shippers

Usage::

    from utils.logging import configure_logging

    configure_logging(cfg.log_format, cfg.log_level)
"""

from __future__ import annotations

import json
import logging

# Extra attributes copied into JSON output when a caller passes them via
# logger.info("...", extra={...}).
_EXTRA_FIELDS = (
    "method", "path", "status", "duration_ms", "client_ip", "request_id",
    "url", "count",
)


class JsonFormatter(logging.Formatter):
    """Emit log records as newline-delimited JSON."""

    def format(self, record: logging.LogRecord) -> str:
        data: dict = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            if hasattr(record, key):
                data[key] = getattr(record, key)
        if record.exc_info:
            data["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(data)


def configure_logging(fmt: str = "text", level: str | int = "INFO") -> logging.Handler:
    """Install a single stream handler on the root logger.

    Replaces any handlers configured earlier in the process, so calling this
    twice (for example from both the app factory and a test) is harmless.

    Returns:
        The installed handler.
    """
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
        )
    logging.basicConfig(handlers=[handler], level=level, force=True)
    return handler
