# delivery_auth/services/_shared/base.py
from __future__ import annotations

from datetime import datetime
from http import HTTPStatus

from delivery_auth.core import errors as api_errors
from delivery_auth.core.clock import Clock, SystemClock
from delivery_auth.services._shared.errors import (
    CustomerAlreadyExistsError,
    ForbiddenError,
    InvalidCredentialsError,
    InvalidRefreshTokenError,
    InvalidRequestError,
    InvalidTokenError,
    NotFoundError,
    RefreshTokenAlreadyExistsError,
    RefreshTokenNotFoundError,
    RestaurantAlreadyExistsError,
    ServiceError,
    StaffAlreadyExistsError,
    TokenMismatchError,
)
from delivery_auth.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)

# (service error, HTTP status, code, message); first match wins
_TRANSLATIONS: tuple[tuple[type[ServiceError], int, str, str], ...] = (
    (InvalidRequestError, HTTPStatus.BAD_REQUEST, "INVALID_REQUEST", "invalid request"),
    (InvalidTokenError, HTTPStatus.UNAUTHORIZED, "UNAUTHORIZED", "unauthorized"),
    (InvalidCredentialsError, HTTPStatus.UNAUTHORIZED, "INVALID_CREDENTIALS", "invalid credentials"),
    (
        InvalidRefreshTokenError,
        HTTPStatus.UNAUTHORIZED,
        "INVALID_REFRESH_TOKEN",
        "invalid or expired refresh token",
    ),
    (
        RefreshTokenNotFoundError,
        HTTPStatus.UNAUTHORIZED,
        "INVALID_REFRESH_TOKEN",
        "invalid or expired refresh token",
    ),
    (TokenMismatchError, HTTPStatus.FORBIDDEN, "TOKEN_MISMATCH", "token mismatch"),
    (ForbiddenError, HTTPStatus.FORBIDDEN, "FORBIDDEN", "forbidden"),
    (
        CustomerAlreadyExistsError,
        HTTPStatus.CONFLICT,
        "CUSTOMER_ALREADY_EXISTS",
        "customer already exists",
    ),
    (StaffAlreadyExistsError, HTTPStatus.CONFLICT, "STAFF_ALREADY_EXISTS", "staff already exists"),
    (
        RestaurantAlreadyExistsError,
        HTTPStatus.CONFLICT,
        "RESTAURANT_ALREADY_EXISTS",
        "restaurant already exists",
    ),
    (RefreshTokenAlreadyExistsError, HTTPStatus.CONFLICT, "CONFLICT", "resource conflict"),
    (NotFoundError, HTTPStatus.NOT_FOUND, "NOT_FOUND", "resource not found"),
)


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide helpers to run read-only and read-write units of work.
    * Own the injected clock so every timestamp is controllable in tests.
    * Centralize the service-error to HTTP-error translation.

    Notes
    -----
    - Services never touch the global session; always use a Unit of Work.
    - Services never import Flask request globals.
    """

    def __init__(self, *, clock: Clock | None = None) -> None:
        """
        Initialize the base service.

        :param clock: Time source; defaults to :class:`SystemClock`.
        :type clock: Clock | None
        """
        self.clock: Clock = clock or SystemClock()

    def now(self) -> datetime:
        """Return the current instant from the injected clock."""
        return self.clock.now()

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        """
        Create a read-write Unit of Work.

        :returns: Read-write UoW instance.
        :rtype: SQLAlchemyUnitOfWork
        """
        return SQLAlchemyUnitOfWork()

    def ro_uow(self) -> SQLAlchemyReadOnlyUnitOfWork:
        """
        Create a read-only Unit of Work.

        :returns: Read-only UoW instance.
        :rtype: SQLAlchemyReadOnlyUnitOfWork
        """
        return SQLAlchemyReadOnlyUnitOfWork()

    # -------------------------- Error handling ------------------------------

    @staticmethod
    def translate_exceptions(exc: Exception) -> Exception:
        """
        Map service-level errors to API-level (HTTP) errors.

        :param exc: Exception raised within a service.
        :type exc: Exception
        :returns: :class:`~delivery_auth.core.errors.APIError` for known service
            errors, otherwise ``exc`` untouched (rendered as 500).
        :rtype: Exception
        """
        for error_type, status, code, message in _TRANSLATIONS:
            if isinstance(exc, error_type):
                return api_errors.APIError(message=message, status_code=status, code=code)
        return exc
