from __future__ import annotations

import json
import logging
import sys
from typing import Any, Dict, Optional, TextIO

LOGGER_NAME = "ethsign"

_LOG = logging.getLogger(LOGGER_NAME)


class _JsonLineFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "level": record.levelname.lower(),
            "event": record.getMessage(),
        }
        fields = getattr(record, "fields", None)
        if isinstance(fields, dict):
            payload.update(fields)
        return json.dumps(payload, sort_keys=True, default=str)


def configure_logging(level: str = "warning", stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Route ``ethsign`` logs to stderr as JSON lines. stdout is reserved for the
    signed transaction.
    """
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(_JsonLineFormatter())
    _LOG.handlers[:] = [handler]
    _LOG.setLevel(getattr(logging, level.upper(), logging.WARNING))
    _LOG.propagate = False
    return _LOG


def build_log_context(**fields: Any) -> Dict[str, Any]:
    return {k: v for k, v in fields.items() if v is not None}


def log_event(event: str, *, level: int = logging.INFO, **fields: Any) -> None:
    _LOG.log(level, event, extra={"fields": build_log_context(**fields)})
