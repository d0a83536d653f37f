"""
Catalog API — Exception Classifier Tests
==========================================

What we test:
    ✅ classify_exception() dispatch order (first match wins)
    ✅ every category renders the right status, message and errors
    ✅ Starlette routing errors (404 / 405) go through the same envelope
    ✅ request body validation → 422 with field keys
    ✅ unclassified exceptions → 500, logged, no leaked details
"""

import logging

import pydantic
import pytest
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.testclient import TestClient
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response

from app.error_handling import (
    ErrorCategory,
    as_validation_error,
    classify_exception,
    register_exception_handlers,
)
from app.exceptions import (
    AccessDeniedError,
    ApiError,
    AuthenticationError,
    DatabaseError,
    HttpResponseError,
    MethodNotAllowedError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from app.schemas.product import ProductCreate


def _create_test_app() -> FastAPI:
    """Minimal app with the classifier and one route per failure mode."""
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/validation")
    async def raise_validation():
        raise ValidationError({"email": ["required"]})

    @app.get("/unauthenticated")
    async def raise_unauthenticated():
        raise AuthenticationError()

    @app.get("/unauthorized")
    async def raise_unauthorized():
        raise UnauthorizedError("Invalid API key.")

    @app.get("/missing")
    async def raise_not_found():
        raise NotFoundError("product", 42)

    @app.get("/method")
    async def raise_method_not_allowed():
        raise MethodNotAllowedError(["get", "head"])

    @app.get("/forbidden")
    async def raise_forbidden():
        raise AccessDeniedError()

    @app.get("/aborted")
    async def raise_http_response():
        raise HttpResponseError(Response("teapot", status_code=418))

    @app.get("/crash")
    async def raise_crash():
        raise RuntimeError("boom")

    @app.get("/crash-silent")
    async def raise_crash_silent():
        raise RuntimeError()

    @app.get("/database")
    async def raise_database():
        raise DatabaseError(context={"detail": "duplicate key value violates constraint"})

    @app.get("/plain-api-error")
    async def raise_plain_api_error():
        raise ApiError("Something odd")

    @app.get("/conflict")
    async def raise_conflict():
        raise StarletteHTTPException(status_code=409, detail="Conflict")

    @app.get("/model")
    async def raise_model_validation():
        ProductCreate(name="", price=0)

    @app.post("/products")
    async def create(body: ProductCreate):
        return {"ok": True}

    @app.get("/only-get")
    async def only_get():
        return {"ok": True}

    return app


@pytest.fixture
def client():
    return TestClient(_create_test_app(), raise_server_exceptions=False)


# ══════════════════════════════════════════════════════════════════════════
# classify_exception()
# ══════════════════════════════════════════════════════════════════════════

class TestClassifyException:

    @pytest.mark.parametrize(
        "exc, expected",
        [
            (ValidationError({"a": ["b"]}), ErrorCategory.VALIDATION),
            (RequestValidationError([]), ErrorCategory.VALIDATION),
            (AuthenticationError(), ErrorCategory.AUTHENTICATION),
            (UnauthorizedError(), ErrorCategory.AUTHENTICATION),
            (StarletteHTTPException(401), ErrorCategory.AUTHENTICATION),
            (NotFoundError("product", 1), ErrorCategory.NOT_FOUND),
            (StarletteHTTPException(404), ErrorCategory.NOT_FOUND),
            (MethodNotAllowedError(["GET"]), ErrorCategory.METHOD_NOT_ALLOWED),
            (StarletteHTTPException(405), ErrorCategory.METHOD_NOT_ALLOWED),
            (AccessDeniedError(), ErrorCategory.ACCESS_DENIED),
            (StarletteHTTPException(403), ErrorCategory.ACCESS_DENIED),
            (HttpResponseError(Response()), ErrorCategory.HTTP_RESPONSE),
            (RuntimeError("boom"), ErrorCategory.SERVER_ERROR),
            (DatabaseError(), ErrorCategory.SERVER_ERROR),
            (ApiError("x"), ErrorCategory.SERVER_ERROR),
            (StarletteHTTPException(409), ErrorCategory.SERVER_ERROR),
        ],
    )
    def test_category(self, exc, expected):
        assert classify_exception(exc) is expected

    def test_bare_pydantic_validation_error_is_server_error(self):
        with pytest.raises(pydantic.ValidationError) as exc_info:
            ProductCreate(name="x", price=-1)
        assert classify_exception(exc_info.value) is ErrorCategory.SERVER_ERROR

    def test_first_match_wins(self):
        class ForbiddenMethod(MethodNotAllowedError, AccessDeniedError):
            pass

        assert classify_exception(ForbiddenMethod(["GET"])) is ErrorCategory.METHOD_NOT_ALLOWED


class TestAsValidationError:

    def test_app_validation_error_returned_as_is(self):
        exc = ValidationError({"email": ["required"]})
        assert as_validation_error(exc) is exc

    def test_request_validation_error_strips_location(self):
        exc = RequestValidationError(
            [{"loc": ("body", "price"), "msg": "Input should be greater than 0", "type": "greater_than"}]
        )
        assert as_validation_error(exc).errors() == {"price": ["Input should be greater than 0"]}

    def test_other_exception_rejected(self):
        with pytest.raises(TypeError):
            as_validation_error(RuntimeError("nope"))


# ══════════════════════════════════════════════════════════════════════════
# Rendered responses
# ══════════════════════════════════════════════════════════════════════════

class TestRenderedResponses:

    def test_validation_error_returns_422_with_fields(self, client):
        response = client.get("/validation")
        assert response.status_code == 422
        assert response.json() == {
            "success": False,
            "message": "Validation failed",
            "errors": {"email": ["required"]},
        }

    def test_authentication_error_returns_401(self, client):
        response = client.get("/unauthenticated")
        assert response.status_code == 401
        assert response.json() == {"success": False, "message": "Unauthenticated."}

    def test_unauthorized_error_returns_401_with_message(self, client):
        response = client.get("/unauthorized")
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid API key."

    def test_not_found_uses_fixed_message_and_general_detail(self, client):
        response = client.get("/missing")
        assert response.status_code == 404
        assert response.json() == {
            "success": False,
            "message": "Resource not found",
            "errors": {"general": ["product with ID '42' was not found"]},
        }

    def test_method_not_allowed_keeps_allow_header(self, client):
        response = client.get("/method")
        assert response.status_code == 405
        assert response.json() == {"success": False, "message": "Method Not Allowed"}
        assert response.headers["allow"] == "GET, HEAD"

    def test_access_denied_returns_403(self, client):
        response = client.get("/forbidden")
        assert response.status_code == 403
        assert response.json() == {
            "success": False,
            "message": "This action is unauthorized.",
        }

    def test_http_response_error_returns_400_error(self, client):
        response = client.get("/aborted")
        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "Error"}

    def test_unhandled_exception_returns_500_with_message(self, client):
        response = client.get("/crash")
        assert response.status_code == 500
        assert response.json() == {"success": False, "message": "boom"}

    def test_unhandled_exception_without_message_uses_default(self, client):
        response = client.get("/crash-silent")
        assert response.status_code == 500
        assert response.json()["message"] == "Server error"

    def test_unhandled_exception_is_logged(self, client, caplog):
        with caplog.at_level(logging.ERROR, logger="app.responses"):
            client.get("/crash")

        records = [r for r in caplog.records if r.name == "app.responses"]
        assert len(records) == 1
        assert records[0].exception == "builtins.RuntimeError"
        assert records[0].method == "GET"
        assert records[0].url.endswith("/crash")
        assert records[0].trace[-1]["function"] == "raise_crash"

    def test_database_error_hides_driver_detail(self, client):
        response = client.get("/database")
        assert response.status_code == 500
        body = response.json()
        assert "duplicate key" not in body["message"]
        assert "errors" not in body

    def test_unclassified_api_error_is_server_error(self, client):
        response = client.get("/plain-api-error")
        assert response.status_code == 500
        assert response.json()["message"] == "Something odd"

    def test_unmapped_http_status_falls_to_server_error(self, client):
        response = client.get("/conflict")
        assert response.status_code == 500
        assert response.json()["message"] == "Conflict"

    def test_model_validation_inside_handler_is_server_error(self, client, caplog):
        with caplog.at_level(logging.ERROR, logger="app.responses"):
            response = client.get("/model")

        assert response.status_code == 500
        assert response.json()["success"] is False
        records = [r for r in caplog.records if r.name == "app.responses"]
        assert records[0].exception.endswith("ValidationError")

    def test_request_body_validation_returns_422(self, client):
        response = client.post("/products", json={"name": "Widget", "price": 0})
        assert response.status_code == 422
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Validation failed"
        assert list(body["errors"]) == ["price"]

    def test_missing_body_field_reported_by_name(self, client):
        response = client.post("/products", json={"price": 10})
        assert response.status_code == 422
        assert "name" in response.json()["errors"]

    def test_malformed_json_body_filed_under_general(self, client):
        response = client.post(
            "/products",
            content=b'{"name": "x", "price": ',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 422
        body = response.json()
        assert body["message"] == "Validation failed"
        assert list(body["errors"]) == ["general"]


class TestRoutingErrors:

    def test_unknown_route_returns_404_envelope(self, client):
        response = client.get("/does-not-exist")
        assert response.status_code == 404
        assert response.json() == {
            "success": False,
            "message": "Resource not found",
            "errors": {"general": ["Not Found"]},
        }

    def test_wrong_method_returns_405_envelope(self, client):
        response = client.delete("/only-get")
        assert response.status_code == 405
        assert response.json() == {"success": False, "message": "Method Not Allowed"}
        assert "GET" in response.headers["allow"]
