"""
Logging helpers: JSON log formatting and per-call request ids.

Every tool call runs under a request id stored in a ContextVar, so log lines
emitted by the executor while serving that call can be correlated.
"""

import contextvars
import functools
import json
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

request_id_var: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "request_id", default=None
)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class StructuredFormatter(logging.Formatter):
    """Render log records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        request_id = request_id_var.get()
        if request_id:
            payload["request_id"] = request_id
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def with_request_id(func: Callable) -> Callable:
    """Run an async tool under a fresh request id."""

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        token = request_id_var.set(uuid.uuid4().hex[:12])
        try:
            return await func(*args, **kwargs)
        finally:
            request_id_var.reset(token)

    return wrapper
