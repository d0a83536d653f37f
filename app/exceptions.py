"""
Catalog API — Custom Exception Hierarchy
==========================================

What:  Application-specific exceptions for the error categories the API
       distinguishes.
How:   Each exception carries a message and an optional context dict.
       The exception classifier (app/error_handling.py) dispatches on these
       types and renders the matching envelope.
Who:   Raised by services, dependencies and route handlers.

Exception Hierarchy:
    ApiError (base)
    ├── ValidationError          → 422 Unprocessable Entity (field errors)
    ├── AuthenticationError      → 401 Unauthorized
    │   └── UnauthorizedError    → 401 Unauthorized
    ├── NotFoundError            → 404 Not Found
    ├── MethodNotAllowedError    → 405 Method Not Allowed
    ├── AccessDeniedError        → 403 Forbidden
    ├── HttpResponseError        → 400 Bad Request (carries a pre-built response)
    └── DatabaseError            → 500 (unclassified; generic message, details in context)

An ApiError that matches none of the subclasses above is unclassified and
ends up as a 500, same as any other exception.
"""

from typing import Any, Dict, Iterable, Mapping, Optional, Union

from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response

from app.message_bag import MessageBag


class ApiError(Exception):
    """
    Base exception for all Catalog API errors.

    Attributes:
        message:  User-facing error description (safe to return in a response)
        context:  Additional debug info (logged, never returned)
    """

    def __init__(
        self,
        message: str = "",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(ApiError):
    """
    Raised when input fails validation with field-level messages.

    HTTP: 422 Unprocessable Entity

    Example response:
        {
            "success": false,
            "message": "Validation failed",
            "errors": {"email": ["The email field is required."]}
        }
    """

    def __init__(
        self,
        errors: Union[MessageBag, Mapping[str, Iterable[str]], None] = None,
        message: str = "The given data was invalid.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        if isinstance(errors, MessageBag):
            self.bag = errors
        else:
            self.bag = MessageBag(errors or {})

    @classmethod
    def with_messages(cls, **messages: Union[str, Iterable[str]]) -> "ValidationError":
        """Shorthand: ValidationError.with_messages(email="The email field is required.")"""
        bag = MessageBag()
        for field, value in messages.items():
            if isinstance(value, str):
                bag.add(field, value)
            else:
                for item in value:
                    bag.add(field, item)
        return cls(bag)

    def errors(self) -> Dict[str, list]:
        """Field → list of messages."""
        return self.bag.to_dict()


class AuthenticationError(ApiError):
    """
    Raised when the caller is not authenticated.

    HTTP: 401 Unauthorized
    """

    def __init__(
        self,
        message: str = "Unauthenticated.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class UnauthorizedError(AuthenticationError):
    """Authenticated identity rejected for this request (bad credentials)."""

    def __init__(
        self,
        message: str = "Unauthorized.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(ApiError):
    """
    Raised when a requested resource does not exist.

    HTTP: 404 Not Found

    The response message is always "Resource not found"; the message built
    here only appears as supplementary detail in `errors.general`.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id is not None:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = str(resource_id)
        super().__init__(message=message, context=ctx)


class MethodNotAllowedError(ApiError):
    """
    Raised when the route exists but not for the request method.

    HTTP: 405 Method Not Allowed, with an `Allow` header listing `allowed`.
    """

    status_code = 405

    def __init__(
        self,
        allowed: Iterable[str] = (),
        message: str = "Method Not Allowed",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.allowed = [method.upper() for method in allowed]
        super().__init__(message=message, context=context)

    @property
    def headers(self) -> Dict[str, str]:
        if not self.allowed:
            return {}
        return {"Allow": ", ".join(self.allowed)}


class AccessDeniedError(ApiError):
    """
    Raised when the caller is known but may not perform the action.

    HTTP: 403 Forbidden
    """

    def __init__(
        self,
        message: str = "This action is unauthorized.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class HttpResponseError(ApiError):
    """
    Raised by code that already built a response and wants to abort with it.

    HTTP: 400 Bad Request with the fixed message "Error". The attached
    response is kept for logging and inspection; it is not sent verbatim.
    """

    def __init__(
        self,
        response: Response,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.response = response
        super().__init__(message="Error", context=context)


class DatabaseError(ApiError):
    """
    Raised when a database operation fails unexpectedly.

    HTTP: 500 through the server-error path. The message is always generic;
    driver errors (SQL text, constraint names) only go into `context`.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


def exception_message(exc: BaseException) -> str:
    """
    User-facing message of any exception.

    ApiError → .message, Starlette HTTPException → .detail, otherwise str(exc).
    """
    if isinstance(exc, ApiError):
        return exc.message
    if isinstance(exc, StarletteHTTPException):
        return exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return str(exc)
