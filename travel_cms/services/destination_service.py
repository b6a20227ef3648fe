"""Destination catalogue service."""
from typing import Any, Dict, List, Optional, Sequence, Tuple
from uuid import UUID

from sqlalchemy import func, or_, select, update
from sqlalchemy.orm import Session

from travel_cms.api.middleware.error_handler import NotFoundException, ValidationException
from travel_cms.lib.db import transaction
from travel_cms.lib.events import ContentChanged, EventBus, get_event_bus
from travel_cms.lib.logging import get_logger
from travel_cms.lib.slugs import unique_slug
from travel_cms.models.destinations import (
    Destination,
    DestinationCategory,
    DestinationStatus,
    Region,
)
from travel_cms.models.packages import Package, PackageStatus
from travel_cms.services.package_service import as_uuid


logger = get_logger(__name__)


class DestinationService:
    """Destination reads and admin mutations."""

    def __init__(self, session: Session, event_bus: Optional[EventBus] = None):
        self.session = session
        self.event_bus = event_bus or get_event_bus()

    def list_destinations(
        self,
        status: Optional[DestinationStatus] = None,
        region: Optional[Region] = None,
        category: Optional[DestinationCategory] = None,
    ) -> List[Tuple[Destination, int]]:
        """Return (destination, package count) pairs ordered by name."""
        package_count = (
            select(func.count(Package.id))
            .where(Package.destination_id == Destination.id)
            .correlate(Destination)
            .scalar_subquery()
        )
        stmt = select(Destination, package_count)
        if status:
            stmt = stmt.where(Destination.status == status)
        if region:
            stmt = stmt.where(Destination.region == region)
        if category:
            stmt = stmt.where(Destination.category == category)
        stmt = stmt.order_by(Destination.name.asc())

        return [(destination, count) for destination, count in self.session.execute(stmt).all()]

    def get_destination(self, id_or_slug: str) -> Tuple[Destination, List[Package]]:
        """Fetch a destination by id or slug with its ACTIVE packages, newest first."""
        destination_id = as_uuid(id_or_slug)
        condition = Destination.slug == str(id_or_slug)
        if destination_id is not None:
            condition = or_(Destination.id == destination_id, condition)

        destination = self.session.execute(
            select(Destination).where(condition)
        ).scalars().first()
        if destination is None:
            raise NotFoundException("Destination")

        packages = self.session.execute(
            select(Package)
            .where(
                Package.destination_id == destination.id,
                Package.status == PackageStatus.ACTIVE,
            )
            .order_by(Package.created_at.desc())
        ).scalars().all()
        return destination, list(packages)

    def package_count(self, destination_id: UUID) -> int:
        return self.session.execute(
            select(func.count(Package.id)).where(Package.destination_id == destination_id)
        ).scalar_one()

    def _get_by_id(self, destination_id: UUID) -> Destination:
        destination = self.session.get(Destination, destination_id)
        if destination is None:
            raise NotFoundException("Destination", str(destination_id))
        return destination

    def _slug_exists(self, slug: str) -> bool:
        return self.session.execute(
            select(Destination.id).where(Destination.slug == slug)
        ).first() is not None

    def create_destination(self, data: Dict[str, Any]) -> Destination:
        name = (data.get("name") or "").strip()
        location = (data.get("location") or "").strip()
        if not name or not location:
            raise ValidationException("Name and location are required")

        fields = {k: v for k, v in data.items() if v is not None}
        fields.update(name=name, location=location)
        fields.setdefault("country", "India")
        fields.setdefault("region", Region.INDIA)
        fields.setdefault("category", DestinationCategory.MOUNTAIN)
        fields.setdefault("status", DestinationStatus.ACTIVE)

        with transaction(self.session):
            destination = Destination(slug=unique_slug(name, self._slug_exists), **fields)
            self.session.add(destination)

        logger.info(f"Destination {destination.id} created", extra={"slug": destination.slug})
        self._publish()
        return destination

    def update_destination(
        self,
        destination_id: UUID,
        changes: Dict[str, Any],
        package_ids: Optional[Sequence[UUID]] = None,
    ) -> Destination:
        """
        Apply a partial update.

        When package_ids is given it replaces the destination's linked
        packages: listed packages are attached, all others detached.
        """
        destination = self._get_by_id(destination_id)

        with transaction(self.session):
            for key, value in changes.items():
                setattr(destination, key, value)

            if package_ids is not None:
                wanted = set(package_ids)
                self.session.execute(
                    update(Package)
                    .where(Package.destination_id == destination.id, Package.id.not_in(wanted))
                    .values(destination_id=None)
                    .execution_options(synchronize_session=False)
                )
                if wanted:
                    self.session.execute(
                        update(Package)
                        .where(Package.id.in_(wanted))
                        .values(destination_id=destination.id)
                        .execution_options(synchronize_session=False)
                    )

        if package_ids is not None:
            self.session.expire(destination, ["packages"])

        logger.info(f"Destination {destination.id} updated", extra={"fields": sorted(changes)})
        self._publish()
        return destination

    def delete_destination(self, destination_id: UUID) -> None:
        """Delete a destination; its packages stay with no destination."""
        destination = self._get_by_id(destination_id)

        with transaction(self.session):
            self.session.execute(
                update(Package)
                .where(Package.destination_id == destination.id)
                .values(destination_id=None)
                .execution_options(synchronize_session=False)
            )
            self.session.delete(destination)

        logger.info(f"Destination {destination_id} deleted")
        self._publish()

    def _publish(self) -> None:
        self.event_bus.publish(ContentChanged(paths=("/", "/destinations")))
