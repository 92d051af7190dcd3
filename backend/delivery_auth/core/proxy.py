"""WSGI proxy middleware configuration and client address helpers."""

from __future__ import annotations

from flask import Flask, request
from werkzeug.middleware.proxy_fix import ProxyFix

REAL_IP_HEADER = "X-Real-IP"


def init_app(app: Flask) -> None:
    """Apply :class:`werkzeug.middleware.proxy_fix.ProxyFix` when enabled.

    Parameters
    ----------
    app: flask.Flask
        Application whose WSGI pipeline should respect upstream proxy headers.

    Notes
    -----
    Controlled by the ``USE_PROXYFIX`` configuration flag (defaults to
    ``True``). ``ProxyFix`` trusts a single hop for ``X-Forwarded-*`` headers.
    """
    if app.config.get("USE_PROXYFIX", True):
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)


def client_ip() -> str:
    """Return the caller address, preferring the ``X-Real-IP`` header.

    Must be called inside a request context. ``remote_addr`` already reflects
    ``X-Forwarded-For`` when :class:`ProxyFix` is installed.
    """
    real_ip = (request.headers.get(REAL_IP_HEADER) or "").strip()
    return real_ip or (request.remote_addr or "")


def user_agent() -> str:
    """Return the raw ``User-Agent`` string of the current request."""
    return request.headers.get("User-Agent", "")
