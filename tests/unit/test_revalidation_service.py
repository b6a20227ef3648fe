"""
Tests for the page revalidation subscriber.
"""
from unittest.mock import MagicMock, patch
from uuid import uuid4

import httpx
import pytest

from travel_cms.lib.events import ContentChanged, EventBus, PackageChanged
from travel_cms.lib.logging import set_correlation_id
from travel_cms.lib.metrics import get_metrics_collector
from travel_cms.services.revalidation_service import RevalidationService


def _outcome(outcome: str) -> int:
    return get_metrics_collector().get_counter_value("revalidations_total", {"outcome": outcome})


@pytest.mark.unit
def test_paths_for_package_event():
    package_id = uuid4()

    paths = RevalidationService.paths_for(PackageChanged(package_id=package_id, slug="goa-escape"))

    assert paths == [f"/packages/{package_id}", "/packages/goa-escape"]


@pytest.mark.unit
def test_paths_for_content_event():
    assert RevalidationService.paths_for(ContentChanged(paths=("/", "/blog"))) == ["/", "/blog"]


@pytest.mark.unit
def test_unconfigured_hook_skips_request():
    service = RevalidationService(url="")

    with patch("travel_cms.services.revalidation_service.httpx.post") as post:
        service(ContentChanged(paths=("/",)))

    post.assert_not_called()
    assert _outcome("skipped") == 1


@pytest.mark.unit
def test_posts_paths_with_secret():
    service = RevalidationService(url="http://site.test/api/revalidate", secret="s3cret", timeout=2.0)
    response = MagicMock()

    with patch("travel_cms.services.revalidation_service.httpx.post", return_value=response) as post:
        service(ContentChanged(paths=("/", "/packages")))

    post.assert_called_once_with(
        "http://site.test/api/revalidate",
        json={"paths": ["/", "/packages"]},
        headers={"X-Revalidate-Secret": "s3cret"},
        timeout=2.0,
    )
    response.raise_for_status.assert_called_once()
    assert _outcome("sent") == 1


@pytest.mark.unit
def test_http_failure_is_logged_not_raised():
    service = RevalidationService(url="http://site.test/api/revalidate", secret="s3cret")

    with patch(
        "travel_cms.services.revalidation_service.httpx.post",
        side_effect=httpx.ConnectError("connection refused"),
    ):
        service(ContentChanged(paths=("/",)))

    assert _outcome("failed") == 1


@pytest.mark.unit
def test_empty_event_is_ignored():
    service = RevalidationService(url="http://site.test/api/revalidate")

    with patch("travel_cms.services.revalidation_service.httpx.post") as post:
        service(ContentChanged(paths=()))

    post.assert_not_called()
    assert _outcome("skipped") == 0


@pytest.mark.unit
def test_register_subscribes_to_bus():
    bus = EventBus()
    service = RevalidationService(url="")
    service.register(bus)

    bus.publish(ContentChanged(paths=("/",)))
    service.unregister(bus)
    bus.publish(ContentChanged(paths=("/",)))

    assert _outcome("skipped") == 1


@pytest.mark.unit
def test_forwards_request_correlation_id():
    service = RevalidationService(url="http://site.test/api/revalidate", secret="s3cret")
    set_correlation_id("req-123")

    try:
        with patch("travel_cms.services.revalidation_service.httpx.post") as post:
            service(ContentChanged(paths=("/",)))
    finally:
        set_correlation_id(None)

    assert post.call_args.kwargs["headers"] == {
        "X-Revalidate-Secret": "s3cret",
        "X-Correlation-ID": "req-123",
    }
