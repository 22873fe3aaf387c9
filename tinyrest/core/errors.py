"""RFC 7807 problem responses for binding, validation and pagination errors.

Domain exceptions from :mod:`tinyrest.errors` know nothing about HTTP. This
module maps them to status codes and renders every handled error, including
werkzeug's and unexpected ones, as ``application/problem+json``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from http import HTTPStatus
from typing import Any, cast

from flask import Flask, Response, has_request_context, jsonify, request
from marshmallow import ValidationError as MarshmallowValidationError
from sqlalchemy.exc import OperationalError
from werkzeug.exceptions import HTTPException

from tinyrest.core.logger import ensure_request_id
from tinyrest.errors import BindingError, PageOutOfRangeError, RequestValidationError

log = logging.getLogger(__name__)

# Stable machine codes for the statuses tinyrest can produce
STATUS_CODES: dict[int, str] = {
    400: "bad_request",
    404: "not_found",
    405: "method_not_allowed",
    415: "unsupported_media_type",
    422: "unprocessable_entity",
    500: "internal_server_error",
    503: "service_unavailable",
}


def problem(
    status: int,
    message: str,
    *,
    code: str | None = None,
    details: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Build an RFC 7807 problem document for the current request.

    :param status: HTTP status code.
    :param message: Client-safe explanation, used as ``detail``.
    :param code: Machine-readable code; derived from ``status`` when omitted.
    :param details: Structured extras such as per-field violations.
    :returns: Problem dictionary.
    :rtype: dict
    """
    body: dict[str, Any] = {
        "type": "about:blank",
        "title": HTTPStatus(status).phrase,
        "status": int(status),
        "detail": message,
        "instance": request.path if has_request_context() else None,
        "code": code or STATUS_CODES.get(status, "error"),
        "request_id": ensure_request_id(),
    }
    if details:
        body["details"] = details
    return body


def problem_response(body: dict[str, Any]) -> tuple[Response, int]:
    """Serialize ``body`` with the ``application/problem+json`` media type."""
    response = jsonify(body)
    response.mimetype = "application/problem+json"
    return response, int(body["status"])


class APIError(Exception):
    """
    Error carrying its own HTTP representation.

    Parameters
    ----------
    message : str
        Client-facing description.
    status_code : int, optional
        HTTP status. Defaults to ``400``.
    code : str | None, optional
        Machine-readable code; derived from the status when omitted.
    details : dict[str, Any] | None, optional
        Structured payload added under ``details``.
    """

    def __init__(
        self,
        message: str,
        status_code: int = HTTPStatus.BAD_REQUEST,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = int(status_code)
        self.code = code or STATUS_CODES.get(self.status_code, "error")
        self.details = details or {}

    def to_problem(self) -> dict[str, Any]:
        return problem(self.status_code, self.message, code=self.code, details=self.details)


class BadRequest(APIError):
    """400: a raw value could not be bound to its declared type."""

    def __init__(self, message: str = "Bad request", details: dict[str, Any] | None = None) -> None:
        super().__init__(message, HTTPStatus.BAD_REQUEST, "binding_error", details)


class NotFound(APIError):
    """404: the resource, or the requested page, does not exist."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, HTTPStatus.NOT_FOUND)


class UnprocessableEntity(APIError):
    """422: a bound transfer object violates its rules."""

    def __init__(
        self, message: str = "Validation failed", details: dict[str, Any] | None = None
    ) -> None:
        super().__init__(message, HTTPStatus.UNPROCESSABLE_ENTITY, "validation_error", details)


_TRANSLATIONS: dict[type[Exception], Callable[[Any], APIError]] = {
    RequestValidationError: lambda exc: UnprocessableEntity(details={"errors": exc.to_list()}),
    BindingError: lambda exc: BadRequest(exc.message, details={"field": exc.field}),
    PageOutOfRangeError: lambda exc: NotFound(str(exc)),
}


def translate_exception(exc: Exception) -> APIError | None:
    """
    Return the :class:`APIError` matching a domain error.

    :param exc: Exception raised below the HTTP layer.
    :returns: API error, or ``None`` when ``exc`` is not a client error.
    :rtype: APIError | None
    """
    for exc_type, build in _TRANSLATIONS.items():
        if isinstance(exc, exc_type):
            return build(exc)
    return None


def _respond(body: dict[str, Any], *, exc_info: bool = False) -> tuple[Response, int]:
    status = int(body["status"])
    level = logging.ERROR if status >= 500 else logging.WARNING
    log.log(
        level,
        "request.failed: code=%s status=%s detail=%s",
        body["code"],
        status,
        body["detail"],
        exc_info=exc_info,
    )
    return problem_response(body)


def init_app(app: Flask) -> None:
    """
    Register problem+json handlers on ``app``.

    Notes
    -----
    - Binding errors answer 400, violations 422 and missing pages 404.
    - Query-string schema errors (marshmallow) answer 422.
    - Database outages answer 503; anything else answers 500 and is logged
      with its traceback.
    """

    @app.errorhandler(APIError)
    def handle_api_error(err: APIError):
        return _respond(err.to_problem())

    @app.errorhandler(RequestValidationError)
    @app.errorhandler(BindingError)
    @app.errorhandler(PageOutOfRangeError)
    def handle_domain_error(err: Exception):
        return handle_api_error(cast(APIError, translate_exception(err)))

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        message = (err.description or HTTPStatus(status).phrase).strip()
        if status == HTTPStatus.NOT_FOUND:
            message = f"Route '{request.path}' not found"
        return _respond(problem(status, message))

    @app.errorhandler(MarshmallowValidationError)
    def handle_schema_error(err: MarshmallowValidationError):
        body = problem(
            HTTPStatus.UNPROCESSABLE_ENTITY,
            "Validation failed",
            code="validation_error",
            details={"errors": err.messages},
        )
        return _respond(body)

    @app.errorhandler(OperationalError)
    def handle_operational_error(err: OperationalError):
        body = problem(HTTPStatus.SERVICE_UNAVAILABLE, "Service temporarily unavailable")
        return _respond(body, exc_info=True)

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        # Unsupported providers end up here: a programming defect, not a client error
        body = problem(HTTPStatus.INTERNAL_SERVER_ERROR, "Unexpected error")
        return _respond(body, exc_info=True)
