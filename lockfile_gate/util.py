"""JSON-lines logging for the gate.

stdout belongs to the report, so every event goes to stderr as one JSON
object carrying the invocation's request id.
"""

from __future__ import annotations

import json
import logging
import time
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import IO

_REQUEST_ID: ContextVar[str] = ContextVar("request_id", default="-")


def begin_request() -> str:
    """Start a new invocation and tag every later event with its id."""
    request_id = uuid.uuid4().hex
    _REQUEST_ID.set(request_id)
    return request_id


def elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000.0, 3)


class JsonLogFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created, timezone.utc)
        payload: dict[str, object] = dict(getattr(record, "fields", {}))
        payload.update(
            event=record.getMessage(),
            level=record.levelname.lower(),
            logger=record.name,
            request_id=_REQUEST_ID.get(),
            ts=ts.strftime("%Y-%m-%dT%H:%M:%SZ"),
        )
        return json.dumps(payload, sort_keys=True, default=str)


def setup_json_logger(name: str, *, stream: IO[str] | None = None) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(stream)
        handler.setFormatter(JsonLogFormatter())
        logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    logger.propagate = False
    return logger


def log_event(logger: logging.Logger, event: str, **fields: object) -> None:
    logger.info(event, extra={"fields": fields})
