"""
Catalog API — Exception Classifier
====================================

What:  Turns any exception that escapes a route into an envelope response.
How:   classify_exception() maps the exception to an ErrorCategory by an
       ordered dispatch (first match wins); render_api_response() builds the
       envelope for that category with the response builder.
Who:   Registered on the FastAPI app by register_exception_handlers().

Dispatch order:
    1. VALIDATION          ValidationError, RequestValidationError  → 422
    2. AUTHENTICATION      AuthenticationError / UnauthorizedError,
                           HTTPException(401)                      → 401
    3. NOT_FOUND           NotFoundError, HTTPException(404)       → 404
    4. METHOD_NOT_ALLOWED  MethodNotAllowedError, HTTPException(405) → own status
    5. ACCESS_DENIED       AccessDeniedError, HTTPException(403)   → 403
    6. HTTP_RESPONSE       HttpResponseError                       → 400 "Error"
    7. SERVER_ERROR        everything else                         → 500 (logged)

Validation and auth come first so their status codes are never masked by the
500 fallback. Only SERVER_ERROR logs; the others are expected outcomes.
A bare pydantic.ValidationError is raised by server-side model code (e.g. a
resource failing on a stored row) and is a SERVER_ERROR.
"""

import enum
import logging

import pydantic
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request

from app.exceptions import (
    AccessDeniedError,
    ApiError,
    AuthenticationError,
    HttpResponseError,
    MethodNotAllowedError,
    NotFoundError,
    ValidationError,
    exception_message,
)
from app.message_bag import MessageBag
from app.responses import (
    error_response,
    forbidden_response,
    not_found_response,
    server_error_response,
    unauthorized_response,
    validation_error_response,
)

logger = logging.getLogger(__name__)


class ErrorCategory(str, enum.Enum):
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    NOT_FOUND = "not_found"
    METHOD_NOT_ALLOWED = "method_not_allowed"
    ACCESS_DENIED = "access_denied"
    HTTP_RESPONSE = "http_response"
    SERVER_ERROR = "server_error"


def _http_status(exc: BaseException) -> int:
    """Status of a Starlette/FastAPI HTTPException, 0 for anything else."""
    if isinstance(exc, StarletteHTTPException):
        return exc.status_code
    return 0


def classify_exception(exc: BaseException) -> ErrorCategory:
    if isinstance(exc, (ValidationError, RequestValidationError)):
        return ErrorCategory.VALIDATION

    status_code = _http_status(exc)

    if isinstance(exc, AuthenticationError) or status_code == 401:
        return ErrorCategory.AUTHENTICATION

    if isinstance(exc, NotFoundError) or status_code == 404:
        return ErrorCategory.NOT_FOUND

    if isinstance(exc, MethodNotAllowedError) or status_code == 405:
        return ErrorCategory.METHOD_NOT_ALLOWED

    if isinstance(exc, AccessDeniedError) or status_code == 403:
        return ErrorCategory.ACCESS_DENIED

    if isinstance(exc, HttpResponseError):
        return ErrorCategory.HTTP_RESPONSE

    return ErrorCategory.SERVER_ERROR


def as_validation_error(exc: BaseException) -> ValidationError:
    """Normalize both validation exception types to app ValidationError."""
    if isinstance(exc, ValidationError):
        return exc
    if isinstance(exc, RequestValidationError):
        return ValidationError(MessageBag.from_pydantic(exc.errors()))
    raise TypeError(f"{type(exc).__name__} is not a validation exception")


async def render_api_response(request: Request, exc: Exception) -> JSONResponse:
    """
    Exception handler for every exception type the app can raise.

    Returns the envelope for the exception's category; headers carried by
    the exception (e.g. Allow on 405) are passed through.
    """
    category = classify_exception(exc)
    headers = getattr(exc, "headers", None) or None

    if category is ErrorCategory.VALIDATION:
        return validation_error_response(as_validation_error(exc))

    if category is ErrorCategory.AUTHENTICATION:
        return unauthorized_response(exception_message(exc), headers=headers)

    if category is ErrorCategory.NOT_FOUND:
        return not_found_response("Resource not found", exception_message(exc), headers=headers)

    if category is ErrorCategory.METHOD_NOT_ALLOWED:
        status_code = getattr(exc, "status_code", 405)
        return error_response(exception_message(exc), status_code, headers=headers)

    if category is ErrorCategory.ACCESS_DENIED:
        return forbidden_response(exception_message(exc), headers=headers)

    if category is ErrorCategory.HTTP_RESPONSE:
        logger.debug("Pre-built response aborted request: %s", exc.response.status_code)
        return error_response("Error", 400)

    return server_error_response("Server error", exc, request=request)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Route every failure through render_api_response().

    Starlette HTTPException and RequestValidationError need their own
    registration because FastAPI installs defaults for both. ApiError and
    pydantic.ValidationError are registered so they are answered inside
    ExceptionMiddleware. Anything else escapes to RequestLoggingMiddleware,
    which renders it; the Exception entry is the last resort for errors
    raised by middleware, served by ServerErrorMiddleware.
    """
    app.add_exception_handler(RequestValidationError, render_api_response)
    app.add_exception_handler(StarletteHTTPException, render_api_response)
    app.add_exception_handler(pydantic.ValidationError, render_api_response)
    app.add_exception_handler(ApiError, render_api_response)
    app.add_exception_handler(Exception, render_api_response)
