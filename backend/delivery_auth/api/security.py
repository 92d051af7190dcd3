"""Request gate: bearer parsing, role checks and subject/tenant matching.

``require_role`` authenticates the request and attaches the identity to
:data:`flask.g` (``auth_subject``, ``auth_role``, ``auth_tenant``); the match
helpers read it back.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from typing import Any, TypeVar

from flask import g, has_request_context, request

from delivery_auth.api.deps import get_access_token_service
from delivery_auth.services._shared.dto import Claims, Role
from delivery_auth.services._shared.errors import (
    AuthHeaderMissingError,
    ForbiddenError,
    InvalidAuthHeaderError,
    InvalidTokenError,
    SubjectMismatchError,
)
from delivery_auth.services._shared.policies.common import is_owner, same_tenant

log = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

BEARER_PREFIX = "Bearer "


def bearer_token() -> str:
    """
    Extract the token from ``Authorization: Bearer <token>``.

    :raises AuthHeaderMissingError: If the header is absent.
    :raises InvalidAuthHeaderError: If the scheme is not ``Bearer``.
    """
    header = request.headers.get("Authorization")
    if not header:
        raise AuthHeaderMissingError()
    if not header.startswith(BEARER_PREFIX):
        raise InvalidAuthHeaderError()
    token = header[len(BEARER_PREFIX) :].strip()
    if not token:
        raise InvalidAuthHeaderError()
    return token


def attach_identity(claims: Claims) -> None:
    """Store the authenticated identity of ``claims`` on :data:`flask.g`."""
    g.auth_subject = claims.subject
    g.auth_role = claims.role.value
    g.auth_tenant = claims.tenant


def require_role(role: Role | str) -> Callable[[F], F]:
    """
    Authenticate the request and require ``role``.

    Missing or malformed headers and invalid or expired tokens yield 401;
    a valid token for another role yields 403.
    """
    required = Role(role)

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            claims = get_access_token_service().validate_access_token(bearer_token())
            if claims.role != required:
                log.warning(
                    "Role gate rejected request",
                    extra={"user_id": claims.subject, "role": claims.role.value},
                )
                raise ForbiddenError()
            attach_identity(claims)
            return func(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator


def current_subject() -> str | None:
    """Return the authenticated subject of this request, if any."""
    if not has_request_context():
        return None
    return g.get("auth_subject")


def current_tenant() -> str | None:
    """Return the tenant (restaurant id) of this request, if any."""
    if not has_request_context():
        return None
    return g.get("auth_tenant")


def require_subject_match(expected: str) -> None:
    """
    Ensure the authenticated subject is ``expected``.

    :raises InvalidTokenError: Without an authenticated identity.
    :raises SubjectMismatchError: If the subject differs.
    """
    subject = current_subject()
    if subject is None:
        raise InvalidTokenError("no authenticated subject")
    if not is_owner(actor_id=subject, owner_id=expected):
        log.warning("Subject gate rejected request", extra={"user_id": subject})
        raise SubjectMismatchError()


def require_tenant_match(expected: str) -> None:
    """
    Ensure the authenticated staff tenant is ``expected``.

    :raises InvalidTokenError: Without an authenticated identity.
    :raises ForbiddenError: If the tenant differs.
    """
    if current_subject() is None:
        raise InvalidTokenError("no authenticated subject")
    if not same_tenant(actor_tenant=current_tenant(), resource_tenant=expected):
        raise ForbiddenError()


__all__ = [
    "bearer_token",
    "require_role",
    "require_subject_match",
    "require_tenant_match",
    "current_subject",
    "current_tenant",
]
