"""
Catalog API — Response Builder
================================

What:  Builds the uniform JSON envelope returned by every endpoint.
How:   Plain functions returning a FastAPI JSONResponse. Success helpers go
       through api_response(), error helpers through error_response().
Who:   Route handlers (success path) and the exception classifier
       (app/error_handling.py) on the error path.

Envelope:
    {"success": bool, "message": str, "data"?: any, "errors"?: any}

    - success is True iff status_code < 400
    - data is only present when not None (success path)
    - errors is only present when not None (error path)

Data processing (process_response_data):
    ResourceCollection → {"items", "pagination"} when backed by a paginator,
                         plain list of resolved items otherwise
    JsonResource       → resource.resolve()
    anything else      → unchanged

Error formatting (format_errors):
    MessageBag → {field: [messages]}
    str        → {"general": [str]}
    other      → unchanged
"""

import logging
import traceback
from typing import Any, Dict, List, Mapping, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from starlette import status
from starlette.requests import Request

from app.config import settings
from app.exceptions import ValidationError, exception_message
from app.message_bag import MessageBag
from app.middleware.request_id import request_id_var
from app.resources import JsonResource, ResourceCollection

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Success Responses
# ══════════════════════════════════════════════════════════════════════════

def ok_response(
    data: Any = None,
    message: str = "Success",
    headers: Optional[Mapping[str, str]] = None,
) -> JSONResponse:
    """200 OK with `data`."""
    return api_response(data, message, status.HTTP_200_OK, headers)


def created_response(
    data: Any = None,
    message: str = "Resource created successfully",
    headers: Optional[Mapping[str, str]] = None,
) -> JSONResponse:
    """201 Created with `data`."""
    return api_response(data, message, status.HTTP_201_CREATED, headers)


# ══════════════════════════════════════════════════════════════════════════
# Error Responses
# ══════════════════════════════════════════════════════════════════════════

def bad_request_response(
    message: str = "Bad request",
    errors: Any = None,
    headers: Optional[Mapping[str, str]] = None,
) -> JSONResponse:
    return error_response(message, status.HTTP_400_BAD_REQUEST, errors, headers)


def unauthorized_response(
    message: str = "Unauthorized",
    errors: Any = None,
    headers: Optional[Mapping[str, str]] = None,
) -> JSONResponse:
    return error_response(message, status.HTTP_401_UNAUTHORIZED, errors, headers)


def forbidden_response(
    message: str = "Forbidden",
    errors: Any = None,
    headers: Optional[Mapping[str, str]] = None,
) -> JSONResponse:
    return error_response(message, status.HTTP_403_FORBIDDEN, errors, headers)


def not_found_response(
    message: str = "Resource not found",
    errors: Any = None,
    headers: Optional[Mapping[str, str]] = None,
) -> JSONResponse:
    return error_response(message, status.HTTP_404_NOT_FOUND, errors, headers)


def unprocessable_entity_response(
    message: str = "Validation failed",
    errors: Any = None,
    headers: Optional[Mapping[str, str]] = None,
) -> JSONResponse:
    return error_response(message, status.HTTP_422_UNPROCESSABLE_ENTITY, errors, headers)


def server_error_response(
    message: str = "Server error",
    exception: Optional[BaseException] = None,
    headers: Optional[Mapping[str, str]] = None,
    request: Optional[Request] = None,
) -> JSONResponse:
    """
    500 Internal Server Error.

    With an exception: it is logged first (see log_exception) and its
    message replaces `message` unless empty. In debug mode the exception
    details from generic_error_response() are returned as `errors`.
    """
    errors = None

    if exception is not None:
        log_exception(exception, request)
        message = exception_message(exception) or message
        if settings.debug:
            errors = generic_error_response(exception)

    return error_response(message, status.HTTP_500_INTERNAL_SERVER_ERROR, errors, headers)


def validation_error_response(exception: ValidationError) -> JSONResponse:
    """422 with the exception's field → messages mapping as `errors`."""
    return unprocessable_entity_response("Validation failed", exception.errors())


# ══════════════════════════════════════════════════════════════════════════
# Generic Builders
# ══════════════════════════════════════════════════════════════════════════

def api_response(
    data: Any = None,
    message: str = "",
    status_code: int = status.HTTP_200_OK,
    headers: Optional[Mapping[str, str]] = None,
) -> JSONResponse:
    """Success envelope; `data` is run through process_response_data()."""
    content: Dict[str, Any] = {
        "success": status_code < 400,
        "message": message,
    }

    if data is not None:
        content["data"] = process_response_data(data)

    return JSONResponse(
        content=jsonable_encoder(content),
        status_code=status_code,
        headers=dict(headers) if headers else None,
    )


def error_response(
    message: str,
    status_code: int = status.HTTP_400_BAD_REQUEST,
    errors: Any = None,
    headers: Optional[Mapping[str, str]] = None,
) -> JSONResponse:
    """Error envelope; `errors` is run through format_errors()."""
    content: Dict[str, Any] = {
        "success": status_code < 400,
        "message": message,
    }

    if errors is not None:
        content["errors"] = format_errors(errors)

    return JSONResponse(
        content=jsonable_encoder(content),
        status_code=status_code,
        headers=dict(headers) if headers else None,
    )


# ══════════════════════════════════════════════════════════════════════════
# Payload Shaping
# ══════════════════════════════════════════════════════════════════════════

def process_response_data(data: Any) -> Any:
    if isinstance(data, ResourceCollection):
        return process_resource_collection(data)

    if isinstance(data, JsonResource):
        return data.resolve()

    return data


def process_resource_collection(collection: ResourceCollection) -> Any:
    """
    Items plus pagination metadata for paginated collections.

    Anything exposing to_dict() is treated as a paginator. Fields missing
    from its output come back as None. `count` is `to - (from - 1)` when
    both bounds are present, else the number of resolved items.
    """
    to_dict = getattr(collection.resource, "to_dict", None)

    if callable(to_dict):
        paginated = to_dict()
        first, last = paginated.get("from"), paginated.get("to")

        return {
            "items": collection.collection,
            "pagination": {
                "total": paginated.get("total"),
                "count": (
                    last - (first - 1)
                    if first is not None and last is not None
                    else len(collection.collection)
                ),
                "per_page": paginated.get("per_page"),
                "current_page": paginated.get("current_page"),
                "total_pages": paginated.get("last_page"),
                "links": {
                    "next": paginated.get("next_page_url"),
                    "prev": paginated.get("prev_page_url"),
                    "first": paginated.get("first_page_url"),
                    "last": paginated.get("last_page_url"),
                },
            },
        }

    # Plain (non-paginated) collections: just the resolved items
    return collection.collection


def format_errors(errors: Any) -> Any:
    if isinstance(errors, MessageBag):
        return errors.to_dict()

    if isinstance(errors, str):
        return {"general": [errors]}

    return errors


# ══════════════════════════════════════════════════════════════════════════
# Exception Details & Logging
# ══════════════════════════════════════════════════════════════════════════

def _trace_frames(exception: BaseException) -> List[Dict[str, Any]]:
    """Stack frames as {file, line, function}; locals and arguments omitted."""
    return [
        {"file": frame.filename, "line": frame.lineno, "function": frame.name}
        for frame in traceback.extract_tb(exception.__traceback__)
    ]


def _origin(exception: BaseException) -> Dict[str, Any]:
    """File and line of the innermost frame, where the exception was raised."""
    frames = traceback.extract_tb(exception.__traceback__)
    if not frames:
        return {"file": None, "line": None}
    return {"file": frames[-1].filename, "line": frames[-1].lineno}


def _qualified_name(exception: BaseException) -> str:
    cls = type(exception)
    return f"{cls.__module__}.{cls.__qualname__}"


def generic_error_response(exception: BaseException) -> Dict[str, Any]:
    """Exception details for debug responses: message, code, class, origin, trace."""
    return {
        "message": exception_message(exception),
        "code": getattr(exception, "status_code", getattr(exception, "code", 0)),
        "exception": _qualified_name(exception),
        **_origin(exception),
        "trace": _trace_frames(exception),
    }


def log_exception(exception: BaseException, request: Optional[Request] = None) -> None:
    """
    Log an unclassified exception at ERROR with structured context.

    extra fields: exception, file, line, trace, url, method, request_id
    """
    extra: Dict[str, Any] = {
        "exception": _qualified_name(exception),
        **_origin(exception),
        "trace": _trace_frames(exception),
        "url": str(request.url) if request is not None else None,
        "method": request.method if request is not None else None,
        "request_id": request_id_var.get(""),
    }

    logger.error(
        "%s [%s] %s %s",
        exception_message(exception) or _qualified_name(exception),
        extra["exception"],
        extra["method"] or "-",
        extra["url"] or "-",
        extra=extra,
    )
