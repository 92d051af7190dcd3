"""Cross-origin policy for browser clients of the auth API."""

from __future__ import annotations

from flask import Flask
from flask_cors import CORS

ALLOWED_HEADERS = ["Authorization", "Content-Type", "X-Request-ID"]
ALLOWED_METHODS = ["GET", "POST", "PUT", "OPTIONS"]


def allowed_origins(raw: str) -> list[str] | str:
    """Return the origin list from ``CORS_ORIGINS``; blank or ``*`` means any."""
    origins = [o.strip() for o in (raw or "").split(",") if o.strip()]
    return "*" if not origins or origins == ["*"] else origins


def init_app(app: Flask) -> None:
    """
    Enable CORS on the versioned routes (``/v1.0/...``).

    Bearer tokens travel in the ``Authorization`` header, never in cookies,
    so credentials support is only turned on for an explicit origin list.
    """
    origins = allowed_origins(app.config.get("CORS_ORIGINS", ""))
    base = str(app.config.get("API_BASE_PREFIX", "")).rstrip("/")
    CORS(
        app,
        resources={rf"{base}/v*": {"origins": origins}},
        allow_headers=ALLOWED_HEADERS,
        methods=ALLOWED_METHODS,
        supports_credentials=origins != "*",
        expose_headers=["X-Request-ID"],
        max_age=app.config.get("CORS_MAX_AGE", 600),
    )
