"""Build logging: JSON lines on stderr, one object per record."""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "name": record.name,
            "msg": record.getMessage(),
        }
        component = getattr(record, "component", None)
        if component:
            payload["component"] = component
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def get_logger(name: str = "component_build") -> logging.Logger:
    """Return the package logger, attaching the JSON handler on first use.

    Child loggers (``component_build.core`` etc.) share the parent's handler
    through propagation, so only the root package logger gets one.
    """
    root = logging.getLogger("component_build")
    if not root.handlers:
        handler = logging.StreamHandler(stream=sys.stderr)
        handler.setFormatter(JsonFormatter())
        root.addHandler(handler)
        root.setLevel(logging.INFO)
    return logging.getLogger(name)
