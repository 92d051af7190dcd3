"""Centralized JSON error handling for the API.

Every error leaves the service with the same body::

    {"code": "UPPER_SNAKE", "message": "human text", "details": ["..."]}
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, jsonify, request
from marshmallow import ValidationError as MarshmallowValidationError
from sqlalchemy.exc import IntegrityError, OperationalError
from werkzeug.exceptions import HTTPException

from delivery_auth.core.logger import ensure_request_id

log = logging.getLogger(__name__)

# Stable codes and messages shared by the whole boundary
CODE_VALIDATION_ERROR = "VALIDATION_ERROR"
MSG_VALIDATION_ERROR = "validation failed"
CODE_INVALID_REQUEST = "INVALID_REQUEST"
MSG_INVALID_REQUEST = "invalid request"
CODE_INTERNAL_ERROR = "INTERNAL_ERROR"
MSG_INTERNAL_ERROR = "an unexpected error occurred"
CODE_NOT_FOUND = "NOT_FOUND"
MSG_NOT_FOUND = "resource not found"
CODE_CONFLICT = "CONFLICT"
MSG_CONFLICT = "resource conflict"
CODE_SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
MSG_SERVICE_UNAVAILABLE = "service temporarily unavailable"


def _http_status_to_code(status_code: int) -> str:
    """Map an HTTP status to an upper-snake code (``405`` -> ``METHOD_NOT_ALLOWED``)."""
    try:
        return HTTPStatus(status_code).name
    except ValueError:
        return "ERROR"


def error_body(code: str, message: str, details: list[str] | None = None) -> dict[str, Any]:
    """
    Build the uniform error payload.

    :param code: Stable machine-consumable error code.
    :param message: Human-readable error summary (safe for clients).
    :param details: Optional list of detail strings; always serialized.
    :returns: Error dictionary.
    :rtype: dict
    """
    return {"code": code, "message": message, "details": list(details or [])}


def _error_response(body: dict[str, Any], status: int) -> tuple[Response, int]:
    resp = jsonify(body)
    resp.headers.setdefault("X-Request-ID", ensure_request_id())
    return resp, status


class APIError(Exception):
    """
    Represent a JSON-serializable API error.

    Parameters
    ----------
    message : str
        Human-readable description presented to clients.
    status_code : int, optional
        HTTP status code to return. Defaults to ``400``.
    code : str, optional
        Machine-readable identifier in upper snake case. Defaults to
        ``"INVALID_REQUEST"``.
    details : list[str] | None, optional
        Detail strings included in the response body.
    """

    def __init__(
        self,
        message: str = MSG_INVALID_REQUEST,
        status_code: int = 400,
        code: str = CODE_INVALID_REQUEST,
        details: list[str] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = int(status_code)
        self.code = code
        self.details = list(details or [])

    def to_body(self) -> dict[str, Any]:
        """
        Serialize error metadata into the uniform body.

        :returns: Error dictionary.
        :rtype: dict
        """
        return error_body(self.code, self.message, self.details)


def init_app(app: Flask) -> None:
    """
    Attach JSON error handlers to the Flask app.

    Notes
    -----
    - Guarantees the uniform ``{code, message, details}`` body for all errors.
    - Service-layer errors are translated through
      :meth:`delivery_auth.services._shared.base.BaseService.translate_exceptions`.
    - Emits 5xx with ``exc_info`` for traceability; 4xx as warnings.
    """
    from delivery_auth.schemas.common import validation_details
    from delivery_auth.services._shared.base import BaseService
    from delivery_auth.services._shared.errors import ServiceError

    @app.errorhandler(APIError)
    def handle_api_error(err: APIError):
        level = log.error if err.status_code >= 500 else log.warning
        level(
            "APIError: code=%s status=%s msg=%s",
            err.code,
            err.status_code,
            err.message,
        )
        return _error_response(err.to_body(), err.status_code)

    @app.errorhandler(ServiceError)
    def handle_service_error(err: ServiceError):
        translated = BaseService.translate_exceptions(err)
        if isinstance(translated, APIError):
            return handle_api_error(translated)
        return handle_unexpected_error(translated)

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        if status == HTTPStatus.NOT_FOUND:
            code, message = CODE_NOT_FOUND, MSG_NOT_FOUND
        elif status >= 500:
            code, message = CODE_INTERNAL_ERROR, MSG_INTERNAL_ERROR
        else:
            code = _http_status_to_code(status)
            message = code.replace("_", " ").lower()
        level = log.error if status >= 500 else log.warning
        # Avoid leaking tracebacks for expected HTTP errors (no exc_info)
        level("HTTPException: code=%s status=%s path=%s", code, status, request.path)
        return _error_response(error_body(code, message), status)

    @app.errorhandler(MarshmallowValidationError)
    def handle_validation_error(err: MarshmallowValidationError):
        details = validation_details(err.normalized_messages())
        log.warning("ValidationError: fields=%s", len(details))
        return _error_response(
            error_body(CODE_VALIDATION_ERROR, MSG_VALIDATION_ERROR, details),
            HTTPStatus.BAD_REQUEST,
        )

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        # Do not leak raw DB error to clients
        log.error("IntegrityError", exc_info=True)
        return _error_response(error_body(CODE_CONFLICT, MSG_CONFLICT), HTTPStatus.CONFLICT)

    @app.errorhandler(OperationalError)
    def handle_operational_error(err: OperationalError):
        # E.g., transient DB connectivity, deadlocks, etc.
        log.error("OperationalError", exc_info=True)
        return _error_response(
            error_body(CODE_SERVICE_UNAVAILABLE, MSG_SERVICE_UNAVAILABLE),
            HTTPStatus.SERVICE_UNAVAILABLE,
        )

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        # Unexpected server-side error; never leak internal details
        log.error("Unhandled exception: %s", type(err).__name__, exc_info=err)
        return _error_response(
            error_body(CODE_INTERNAL_ERROR, MSG_INTERNAL_ERROR),
            HTTPStatus.INTERNAL_SERVER_ERROR,
        )
