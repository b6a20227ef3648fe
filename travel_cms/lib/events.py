"""
In-process content change events.

Mutations publish explicit events once their transaction has committed;
subscribers (page revalidation, tests) consume them. Subscriber failures are
logged and never propagate back into the request that published the event.

Usage:
    from travel_cms.lib.events import PackageChanged, get_event_bus

    bus = get_event_bus()
    bus.subscribe(handler)
    bus.publish(PackageChanged(package_id=pkg.id, slug=pkg.slug))
"""
from dataclasses import dataclass, field
from threading import Lock
from typing import Callable, List, Optional, Tuple, Union
from uuid import UUID

from travel_cms.lib.logging import get_logger


logger = get_logger(__name__)


@dataclass(frozen=True)
class PackageChanged:
    """A package's public page is stale (reviews, rating or content changed)."""
    package_id: UUID
    slug: Optional[str] = None
    rating: Optional[float] = None
    reviews: Optional[int] = None


@dataclass(frozen=True)
class ContentChanged:
    """Arbitrary public pages are stale."""
    paths: Tuple[str, ...] = field(default_factory=tuple)


Event = Union[PackageChanged, ContentChanged]
Subscriber = Callable[[Event], None]


class EventBus:
    """Synchronous publish/subscribe dispatcher."""

    def __init__(self):
        self._lock = Lock()
        self._subscribers: List[Subscriber] = []

    def subscribe(self, subscriber: Subscriber) -> None:
        with self._lock:
            if subscriber not in self._subscribers:
                self._subscribers.append(subscriber)

    def unsubscribe(self, subscriber: Subscriber) -> None:
        with self._lock:
            if subscriber in self._subscribers:
                self._subscribers.remove(subscriber)

    def publish(self, event: Event) -> None:
        with self._lock:
            subscribers = list(self._subscribers)

        for subscriber in subscribers:
            try:
                subscriber(event)
            except Exception:
                logger.error(
                    f"Event subscriber failed for {type(event).__name__}",
                    exc_info=True,
                )

    def clear(self) -> None:
        """Remove all subscribers (for testing)."""
        with self._lock:
            self._subscribers.clear()


# Global singleton instance
_event_bus: EventBus | None = None
_event_bus_lock = Lock()


def get_event_bus() -> EventBus:
    """Get global event bus singleton."""
    global _event_bus
    if _event_bus is None:
        with _event_bus_lock:
            if _event_bus is None:
                _event_bus = EventBus()
    return _event_bus
