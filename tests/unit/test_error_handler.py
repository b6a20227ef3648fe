"""
Tests for error handler middleware and custom exceptions.
"""
import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient
from pydantic import BaseModel, Field

from travel_cms.api.middleware.error_handler import (
    AppException,
    InternalException,
    NotFoundException,
    SearchException,
    UnauthorizedException,
    ValidationException,
    register_exception_handlers,
)


@pytest.mark.unit
def test_app_exception_creation():
    """Test creating custom AppException."""
    exc = AppException(
        message="Test error",
        status_code=500,
        details={"key": "value"},
    )

    assert exc.message == "Test error"
    assert exc.status_code == 500
    assert exc.details == {"key": "value"}


@pytest.mark.unit
def test_not_found_exception():
    exc = NotFoundException("Review", "123")

    assert exc.message == "Review not found"
    assert exc.status_code == 404
    assert exc.details == {"resource": "Review", "resource_id": "123"}


@pytest.mark.unit
def test_not_found_exception_without_id():
    exc = NotFoundException("Package")

    assert exc.message == "Package not found"
    assert exc.details == {}


@pytest.mark.unit
def test_unauthorized_exception():
    exc = UnauthorizedException()

    assert exc.message == "Unauthorized"
    assert exc.status_code == 401


@pytest.mark.unit
def test_validation_exception():
    exc = ValidationException("Invalid status", errors={"status": "PUBLISHED"})

    assert exc.message == "Invalid status"
    assert exc.status_code == 400
    assert exc.details["errors"] == {"status": "PUBLISHED"}


@pytest.mark.unit
def test_search_exception_is_internal():
    exc = SearchException()

    assert isinstance(exc, InternalException)
    assert exc.message == "Failed to search"
    assert exc.status_code == 500


def _app() -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)
    return app


@pytest.mark.integration
def test_app_exception_handler_in_route():
    app = _app()

    @app.get("/missing")
    async def missing(request: Request):
        request.state.correlation_id = "corr-123"
        raise NotFoundException("Review", "123")

    response = TestClient(app).get("/missing")

    assert response.status_code == 404
    assert response.json() == {
        "error": "Review not found",
        "correlation_id": "corr-123",
        "details": {"resource": "Review", "resource_id": "123"},
    }


@pytest.mark.integration
def test_server_error_hides_details():
    app = _app()

    @app.get("/search-down")
    async def search_down():
        raise SearchException()

    response = TestClient(app).get("/search-down")

    assert response.status_code == 500
    data = response.json()
    assert data["error"] == "Failed to search"
    assert "details" not in data


@pytest.mark.integration
def test_request_validation_maps_to_400():
    app = _app()

    class Vote(BaseModel):
        rating: int = Field(..., ge=1, le=5)

    @app.post("/vote")
    async def vote(data: Vote):
        return {"ok": True}

    response = TestClient(app).post("/vote", json={"rating": 9})

    assert response.status_code == 400
    data = response.json()
    assert data["error"] == "Validation error"
    assert data["details"]["errors"][0]["loc"] == ["body", "rating"]


@pytest.mark.integration
def test_http_exception_handler():
    response = TestClient(_app()).get("/no-such-route")

    assert response.status_code == 404
    assert response.json()["error"] == "Not Found"


@pytest.mark.integration
def test_unhandled_exception_handler():
    app = _app()

    @app.get("/boom")
    async def boom():
        raise ValueError("Unexpected error")

    response = TestClient(app, raise_server_exceptions=False).get("/boom")

    assert response.status_code == 500
    assert response.json()["error"] == "Internal server error"
