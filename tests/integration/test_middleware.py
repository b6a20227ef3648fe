"""
Integration tests for FastAPI middleware (CORS, correlation_id) and app wiring.
"""
import uuid

import pytest
from fastapi.testclient import TestClient

from travel_cms.api.app import app
from travel_cms.lib.events import ContentChanged, get_event_bus
from travel_cms.lib.metrics import get_metrics_collector


@pytest.mark.integration
def test_cors_headers_included(client):
    response = client.get("/health", headers={"Origin": "http://localhost:3000"})

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "http://localhost:3000"


@pytest.mark.integration
def test_cors_preflight_request(client):
    response = client.options(
        "/reviews",
        headers={
            "Origin": "http://localhost:3000",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "content-type",
        },
    )

    assert response.status_code == 200
    assert "access-control-allow-methods" in response.headers


@pytest.mark.integration
def test_correlation_id_generated(client):
    response = client.get("/health")

    uuid.UUID(response.headers["X-Correlation-ID"])


@pytest.mark.integration
def test_correlation_id_preserved(client):
    custom_correlation_id = str(uuid.uuid4())

    response = client.get("/health", headers={"X-Correlation-ID": custom_correlation_id})

    assert response.headers["X-Correlation-ID"] == custom_correlation_id


@pytest.mark.integration
def test_correlation_id_on_error(client):
    custom_correlation_id = str(uuid.uuid4())

    response = client.patch(
        "/reviews",
        json={"id": "not-a-uuid", "action": "helpful"},
        headers={"X-Correlation-ID": custom_correlation_id},
    )

    assert response.status_code == 400
    assert response.json()["correlation_id"] == custom_correlation_id
    assert response.headers["X-Correlation-ID"] == custom_correlation_id


@pytest.mark.integration
def test_lifespan_registers_revalidation_subscriber():
    """With no hook configured, published events are counted as skipped."""
    with TestClient(app):
        get_event_bus().publish(ContentChanged(paths=("/",)))

    get_event_bus().publish(ContentChanged(paths=("/",)))

    skipped = get_metrics_collector().get_counter_value("revalidations_total", {"outcome": "skipped"})
    assert skipped == 1
