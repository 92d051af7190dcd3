"""Shared API helpers for request parsing, service wiring and timing."""

from __future__ import annotations

import functools
import hashlib
import time
from collections.abc import Callable
from datetime import timedelta
from typing import Any, TypeVar

from flask import Response, current_app, jsonify, request
from marshmallow import Schema, ValidationError

from delivery_auth.core.clock import get_clock
from delivery_auth.core.keys import get_secret_provider
from delivery_auth.core.proxy import client_ip, user_agent
from delivery_auth.infra.database import SQLAlchemyRefreshTokenStore
from delivery_auth.schemas.common import has_type_errors
from delivery_auth.services._shared.dto import DeviceInfo
from delivery_auth.services._shared.errors import InvalidRequestError
from delivery_auth.services.access_tokens import AccessTokenService
from delivery_auth.services.auth import AuthConfig, AuthService
from delivery_auth.services.customers import CustomerService
from delivery_auth.services.refresh_tokens import RefreshTokenService
from delivery_auth.services.restaurants import RestaurantService
from delivery_auth.services.staff import StaffService

F = TypeVar("F", bound=Callable[..., Any])


# --------------------------------------------------------------------------- #
# Request parsing
# --------------------------------------------------------------------------- #


def load_json(schema: Schema) -> dict[str, Any]:
    """
    Parse the JSON body with ``schema``.

    :raises InvalidRequestError: If the body is not a JSON object or a field
        has the wrong JSON type.
    :raises marshmallow.ValidationError: For rule violations (rendered as
        ``VALIDATION_ERROR``).
    """
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise InvalidRequestError()
    try:
        return schema.load(payload)
    except ValidationError as err:
        if has_type_errors(err.normalized_messages()):
            raise InvalidRequestError() from err
        raise


def device_id_for(agent: str, ip: str) -> str:
    """Return the hex SHA-256 fingerprint of ``"<user_agent>|<ip>"``."""
    return hashlib.sha256(f"{agent}|{ip}".encode()).hexdigest()


def request_device() -> DeviceInfo:
    """Describe the calling device from the request headers."""
    agent, ip = user_agent(), client_ip()
    return DeviceInfo(device_id=device_id_for(agent, ip), user_agent=agent, ip=ip)


# --------------------------------------------------------------------------- #
# Service wiring
# --------------------------------------------------------------------------- #


def get_access_token_service() -> AccessTokenService:
    return AccessTokenService(secrets=get_secret_provider(), clock=get_clock())


def get_refresh_token_service() -> RefreshTokenService:
    cfg = current_app.config
    return RefreshTokenService(
        store=SQLAlchemyRefreshTokenStore(),
        clock=get_clock(),
        ttl=timedelta(seconds=int(cfg.get("REFRESH_TOKEN_TTL_SECONDS", 7 * 24 * 3600))),
        max_attempts=int(cfg.get("REFRESH_TOKEN_MAX_ATTEMPTS", 3)),
    )


def get_customer_service() -> CustomerService:
    return CustomerService(clock=get_clock())


def get_staff_service() -> StaffService:
    return StaffService(clock=get_clock())


def get_auth_service() -> AuthService:
    """Assemble the orchestrator from application configuration."""
    cfg = current_app.config
    return AuthService(
        access_tokens=get_access_token_service(),
        refresh_tokens=get_refresh_token_service(),
        customers=get_customer_service(),
        staff=get_staff_service(),
        clock=get_clock(),
        cfg=AuthConfig(
            login_expiration_seconds=int(cfg.get("ACCESS_TOKEN_EXPIRES_SECONDS", 3600)),
            grace_window=timedelta(seconds=max(0, int(cfg.get("REFRESH_GRACE_SECONDS", 3)))),
        ),
    )


def get_restaurant_service() -> RestaurantService:
    return RestaurantService(auth=get_auth_service(), clock=get_clock())


def access_expiration_seconds() -> int:
    return int(current_app.config.get("ACCESS_TOKEN_EXPIRES_SECONDS", 3600))


# --------------------------------------------------------------------------- #
# Responses
# --------------------------------------------------------------------------- #


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
