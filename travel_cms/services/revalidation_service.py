"""Page revalidation subscriber.

Translates content change events into public page paths and asks the
front-end to drop its cached copies. Delivery is best effort: a failing
request is logged and counted, never retried and never raised.
"""
from typing import List, Optional

import httpx

from travel_cms.lib.events import ContentChanged, Event, EventBus, PackageChanged
from travel_cms.lib.logging import get_correlation_id, get_logger, log_with_context
from travel_cms.lib.metrics import get_metrics_collector
from travel_cms.lib.settings import settings


logger = get_logger(__name__)


class RevalidationService:
    """Event subscriber that POSTs stale page paths to the front-end hook."""

    def __init__(
        self,
        url: Optional[str] = None,
        secret: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.url = settings.revalidate_url if url is None else url
        self.secret = settings.revalidate_secret if secret is None else secret
        self.timeout = settings.revalidate_timeout_seconds if timeout is None else timeout
        self.metrics = get_metrics_collector()

    def register(self, bus: EventBus) -> None:
        bus.subscribe(self)

    def unregister(self, bus: EventBus) -> None:
        bus.unsubscribe(self)

    @staticmethod
    def paths_for(event: Event) -> List[str]:
        """Public paths made stale by an event."""
        if isinstance(event, PackageChanged):
            paths = [f"/packages/{event.package_id}"]
            if event.slug:
                paths.append(f"/packages/{event.slug}")
            return paths
        if isinstance(event, ContentChanged):
            return list(event.paths)
        return []

    def __call__(self, event: Event) -> None:
        paths = self.paths_for(event)
        if not paths:
            return

        if not self.url:
            log_with_context(logger, "debug", "Revalidation hook not configured", paths=paths)
            self.metrics.increment_revalidations("skipped")
            return

        headers = {"X-Revalidate-Secret": self.secret}
        correlation_id = get_correlation_id()
        if correlation_id:
            headers["X-Correlation-ID"] = correlation_id

        try:
            response = httpx.post(
                self.url,
                json={"paths": paths},
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            log_with_context(
                logger, "warning", f"Page revalidation failed: {e}",
                paths=paths, url=self.url,
            )
            self.metrics.increment_revalidations("failed")
            return

        log_with_context(logger, "info", "Pages revalidated", paths=paths)
        self.metrics.increment_revalidations("sent")
