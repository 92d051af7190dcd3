"""JSON logging for the auth service with per-request correlation ids.

Every record carries ``request_id`` and, inside a request, ``method`` and
``path``. Auth events attach the identity through ``extra=`` (``user_id``,
``role``, ``tenant_id``); credential material passed the same way is masked.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

from flask import Flask, g, has_request_context, request

REQUEST_ID_HEADER = "X-Request-ID"
CORRELATION_HEADERS = (REQUEST_ID_HEADER, "X-Correlation-ID")

IDENTITY_KEYS = ("user_id", "role", "tenant_id")
TIMING_KEYS = ("endpoint", "elapsed_ms", "status")
# Never rendered verbatim even if a caller passes them in ``extra=``
SECRET_KEYS = ("password", "access_token", "refresh_token", "token")
MASK = "***"


class JSONFormatter(logging.Formatter):
    """Render a record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, UTC).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
        }
        for key in ("method", "path", *IDENTITY_KEYS, *TIMING_KEYS):
            value = getattr(record, key, None)
            if value is not None:
                payload[key] = value
        for key in SECRET_KEYS:
            if hasattr(record, key):
                payload[key] = MASK
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class RequestContextFilter(logging.Filter):
    """Stamp records with the correlation id and request line."""

    def filter(self, record: logging.LogRecord) -> bool:
        if has_request_context():
            record.request_id = ensure_request_id()
            record.method = request.method
            record.path = request.path
        else:
            record.request_id = None
        return True


def ensure_request_id() -> str:
    """
    Return the correlation id of the current request.

    The first of :data:`CORRELATION_HEADERS` sent by the client wins;
    otherwise a UUID4 is generated and kept on :data:`flask.g`.
    """
    if not has_request_context():
        return str(uuid4())
    request_id = g.get("request_id")
    if request_id is None:
        request_id = next(
            (request.headers[h] for h in CORRELATION_HEADERS if request.headers.get(h)),
            None,
        ) or str(uuid4())
        g.request_id = request_id
    return request_id


def configure_logging(level: str | int = "INFO") -> None:
    """Send JSON records to stdout at ``level`` (name or number)."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())
    handler.addFilter(RequestContextFilter())
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level.upper() if isinstance(level, str) else level)


def init_app(app: Flask) -> None:
    """Install the request-id hooks on ``app``."""
    app.logger.addFilter(RequestContextFilter())

    @app.before_request
    def _seed_request_id() -> None:
        # g can outlive a request when an app context is already pushed
        g.pop("request_id", None)
        ensure_request_id()

    @app.after_request
    def _echo_request_id(response):
        response.headers.setdefault(REQUEST_ID_HEADER, ensure_request_id())
        return response


__all__ = ["configure_logging", "init_app", "ensure_request_id", "JSONFormatter"]
