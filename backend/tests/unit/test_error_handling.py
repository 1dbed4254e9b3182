"""
Unit Tests for Error Handling.

Tests for:
- ServiceError defaults and overrides
- Structured JSON error responses (correlation id, debug details)
- handle_endpoint_errors wrapping and signature preservation
"""

import asyncio
import inspect

import pytest
from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient

from toeic_study.middleware.error_handling import (
    ServiceError,
    ValidationError,
    handle_endpoint_errors,
    setup_error_handling,
)


def build_app(debug: bool) -> FastAPI:
    """Tiny app whose routes fail in each supported way."""
    app = FastAPI()
    setup_error_handling(app, debug=debug)

    @app.get("/service-error")
    async def service_error():
        raise ServiceError("Upstream unavailable", status_code=503, details={"retry": 5})

    @app.get("/validation-error")
    async def validation_error():
        raise ValidationError("Session ends before it starts", details={"session_id": "s1"})

    @app.get("/unhandled")
    async def unhandled():
        raise RuntimeError("boom")

    @app.get("/wrapped")
    @handle_endpoint_errors("Wrapped operation")
    async def wrapped():
        raise KeyError("missing")

    @app.get("/http-error")
    @handle_endpoint_errors("HTTP operation")
    async def http_error():
        raise HTTPException(status_code=404, detail="Not here")

    @app.get("/ok")
    @handle_endpoint_errors("OK operation")
    async def ok(name: str = "world"):
        return {"hello": name}

    return app


@pytest.fixture
def client() -> TestClient:
    return TestClient(build_app(debug=False), raise_server_exceptions=False)


@pytest.fixture
def debug_client() -> TestClient:
    return TestClient(build_app(debug=True), raise_server_exceptions=False)


class TestServiceError:
    """Tests for the exception classes."""

    def test_defaults(self) -> None:
        error = ServiceError("Something failed")
        assert error.status_code == 500
        assert error.error_code == "service_error"
        assert error.details is None
        assert str(error) == "Something failed"

    def test_overrides(self) -> None:
        error = ServiceError("Busy", status_code=503, error_code="busy", details={"a": 1})
        assert error.status_code == 503
        assert error.error_code == "busy"
        assert error.details == {"a": 1}

    def test_validation_error(self) -> None:
        error = ValidationError("Bad records")
        assert error.status_code == 422
        assert error.error_code == "validation_error"
        assert isinstance(error, ServiceError)


class TestErrorResponses:
    """Tests for the JSON error body."""

    def test_service_error_body(self, client: TestClient) -> None:
        response = client.get("/service-error")
        body = response.json()

        assert response.status_code == 503
        assert body["error"] == "service_error"
        assert body["message"] == "Upstream unavailable"
        assert len(body["error_id"]) == 8
        assert body["details"] is None  # hidden outside debug
        assert "timestamp" in body

    def test_details_shown_in_debug(self, debug_client: TestClient) -> None:
        body = debug_client.get("/service-error").json()
        assert body["details"] == {"retry": 5}

    def test_validation_error_status(self, client: TestClient) -> None:
        response = client.get("/validation-error")
        assert response.status_code == 422
        assert response.json()["error"] == "validation_error"

    def test_unhandled_error_is_sanitized(self, client: TestClient) -> None:
        response = client.get("/unhandled")
        body = response.json()

        assert response.status_code == 500
        assert body["error"] == "internal_server_error"
        assert body["message"] == "An unexpected error occurred"
        assert body["details"] is None

    def test_unhandled_error_details_in_debug(self, debug_client: TestClient) -> None:
        body = debug_client.get("/unhandled").json()
        assert body["details"]["exception"] == "RuntimeError"
        assert body["details"]["message"] == "boom"


class TestHandleEndpointErrors:
    """Tests for the handle_endpoint_errors decorator."""

    def test_unexpected_error_becomes_500(self, client: TestClient) -> None:
        response = client.get("/wrapped")
        assert response.status_code == 500
        assert response.json()["detail"] == "Wrapped operation failed"

    def test_http_exception_passes_through(self, client: TestClient) -> None:
        response = client.get("/http-error")
        assert response.status_code == 404
        assert response.json()["detail"] == "Not here"

    def test_success_passes_through(self, client: TestClient) -> None:
        response = client.get("/ok", params={"name": "toeic"})
        assert response.status_code == 200
        assert response.json() == {"hello": "toeic"}

    def test_signature_preserved(self) -> None:
        """FastAPI still sees the route's real parameters."""
        from toeic_study.routers.progress import compute_level

        params = list(inspect.signature(compute_level).parameters)
        assert params == ["stats", "engine"]

    def test_service_error_reraised(self) -> None:
        @handle_endpoint_errors("Failing")
        async def failing():
            raise ValidationError("nope")

        with pytest.raises(ValidationError):
            asyncio.run(failing())
