"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic**: they never depend on Flask or
HTTP. They are the stable contract between repositories, the credential
services and the orchestrator.

The translation to HTTP responses is handled by ``delivery_auth/core/errors.py``
via ``BaseService.translate_exceptions()``.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    PostgreSQL reports the constraint name; SQLite reports the offending
    columns, so callers pass either the constraint name or a column hint.

    Parameters
    ----------
    exc : IntegrityError
        The exception raised by SQLAlchemy during flush/commit.
    constraint_name : str
        Constraint name or column reference to look for (e.g. ``'uq_customers_email'``).

    Returns
    -------
    bool
        True if the IntegrityError mentions the given constraint.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    return constraint_name.lower() in message


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - The error handlers translate them through ``BaseService.translate_exceptions``.
    """

    default_message = "service error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


# --------------------------------------------------------------------------- #
# Requests
# --------------------------------------------------------------------------- #


class InvalidRequestError(ServiceError):
    """Raised when the request body is not the expected JSON object."""

    default_message = "invalid request"


# --------------------------------------------------------------------------- #
# Credentials and tokens
# --------------------------------------------------------------------------- #


class InvalidTokenError(ServiceError):
    """Access token is malformed, badly signed, expired or carries bad claims."""

    default_message = "invalid token"


class AuthHeaderMissingError(InvalidTokenError):
    default_message = "authorization header is missing"


class InvalidAuthHeaderError(InvalidTokenError):
    default_message = "authorization header must use the Bearer scheme"


class InvalidCredentialsError(ServiceError):
    default_message = "invalid credentials"


class InvalidRefreshTokenError(ServiceError):
    """Refresh token is unknown, revoked or past its expiry."""

    default_message = "invalid or expired refresh token"


class TokenMismatchError(ServiceError):
    """Access and refresh tokens do not describe the same identity."""

    default_message = "token mismatch"


class RefreshTokenNotFoundError(ServiceError):
    """No usable refresh record matches the token."""

    default_message = "refresh token not found"


class RefreshTokenAlreadyExistsError(ServiceError):
    default_message = "refresh token already exists"


# --------------------------------------------------------------------------- #
# Authorization
# --------------------------------------------------------------------------- #


class ForbiddenError(ServiceError):
    default_message = "forbidden"


class SubjectMismatchError(ForbiddenError):
    """Authenticated subject differs from the resource owner."""

    default_message = "subject mismatch"


# --------------------------------------------------------------------------- #
# Identities
# --------------------------------------------------------------------------- #


class CustomerAlreadyExistsError(ServiceError):
    default_message = "customer already exists"


class StaffAlreadyExistsError(ServiceError):
    default_message = "staff already exists"


class RestaurantAlreadyExistsError(ServiceError):
    default_message = "restaurant already exists"


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    :param entity: Entity name (e.g., "Customer").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str
    """

    entity: str
    key: str

    def __post_init__(self) -> None:
        Exception.__init__(self, str(self))

    def __str__(self) -> str:
        return f"{self.entity} not found: {self.key}"
