"""Package catalogue: public listing and admin management."""
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.orm import Session, selectinload

from travel_cms.api.middleware.error_handler import NotFoundException, ValidationException
from travel_cms.lib.db import transaction
from travel_cms.lib.events import ContentChanged, EventBus, get_event_bus
from travel_cms.lib.logging import get_logger
from travel_cms.lib.slugs import copy_slug, unique_slug
from travel_cms.models.destinations import Destination
from travel_cms.models.packages import (
    Difficulty,
    Package,
    PackageStatus,
    PackageType,
)


logger = get_logger(__name__)

# Written only by the rating aggregator
DERIVED_FIELDS = frozenset({"rating", "reviews"})
# Copied verbatim by duplicate_package; the copy starts with no reviews
COPIED_FIELDS = (
    "destination_id", "destination_name", "location", "country", "image", "images",
    "price", "original_price", "duration", "group_size",
    "description", "highlights", "inclusions", "exclusions", "itinerary", "faqs",
    "policies", "best_time", "difficulty", "type", "badge",
)


def as_uuid(value: str) -> Optional[UUID]:
    try:
        return UUID(str(value))
    except ValueError:
        return None


class PackageService:
    """Package reads and admin mutations.

    Args:
        session: SQLAlchemy session for database operations
        event_bus: Where page invalidation events are published
    """

    def __init__(self, session: Session, event_bus: Optional[EventBus] = None):
        self.session = session
        self.event_bus = event_bus or get_event_bus()

    def list_packages(
        self,
        status: Optional[PackageStatus] = None,
        package_type: Optional[PackageType] = None,
        featured: bool = False,
        destination_id: Optional[UUID] = None,
        destination: Optional[str] = None,
        min_price: Optional[str] = None,
        max_price: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Package]:
        """
        List packages, featured first then newest.

        Price bounds arrive as raw query strings; bounds that do not parse
        as numbers are ignored rather than rejected.
        """
        stmt = select(Package).options(selectinload(Package.destination))

        if status:
            stmt = stmt.where(Package.status == status)
        if package_type:
            stmt = stmt.where(Package.type == package_type)
        if featured:
            stmt = stmt.where(Package.featured.is_(True))
        if destination_id:
            stmt = stmt.where(Package.destination_id == destination_id)
        if destination:
            stmt = stmt.where(Package.destination_name.icontains(destination, autoescape=True))

        low = _parse_price(min_price)
        if low is not None:
            stmt = stmt.where(Package.price >= low)
        high = _parse_price(max_price)
        if high is not None:
            stmt = stmt.where(Package.price <= high)

        stmt = stmt.order_by(Package.featured.desc(), Package.created_at.desc())
        if limit:
            stmt = stmt.limit(limit)

        return list(self.session.execute(stmt).scalars().all())

    def get_package(self, id_or_slug: str) -> Package:
        """Fetch a package by id or slug."""
        package_id = as_uuid(id_or_slug)
        condition = Package.slug == str(id_or_slug)
        if package_id is not None:
            condition = or_(Package.id == package_id, condition)

        package = self.session.execute(
            select(Package).options(selectinload(Package.destination)).where(condition)
        ).scalars().first()
        if package is None:
            raise NotFoundException("Package")
        return package

    def _get_by_id(self, package_id: UUID) -> Package:
        package = self.session.get(Package, package_id)
        if package is None:
            raise NotFoundException("Package", str(package_id))
        return package

    def _slug_exists(self, slug: str) -> bool:
        return self.session.execute(
            select(Package.id).where(Package.slug == slug)
        ).first() is not None

    def create_package(self, data: Dict[str, Any]) -> Package:
        """
        Create a package from validated fields.

        Defaults: country "India", destination_name falls back to location,
        difficulty EASY, type PREMIUM, status ACTIVE.
        """
        name = (data.get("name") or "").strip()
        if not name or data.get("price") is None:
            raise ValidationException("Name and price are required")
        self._check_destination(data.get("destination_id"))

        fields = {k: v for k, v in data.items() if k not in DERIVED_FIELDS and v is not None}
        fields["name"] = name
        fields.setdefault("country", "India")
        fields.setdefault("destination_name", data.get("location"))
        fields.setdefault("difficulty", Difficulty.EASY)
        fields.setdefault("type", PackageType.PREMIUM)
        fields.setdefault("status", PackageStatus.ACTIVE)
        fields.setdefault("featured", False)

        with transaction(self.session):
            package = Package(slug=unique_slug(name, self._slug_exists), **fields)
            self.session.add(package)

        logger.info(f"Package {package.id} created", extra={"slug": package.slug})
        self._publish(package)
        return package

    def update_package(self, package_id: UUID, changes: Dict[str, Any]) -> Package:
        """Apply a partial update; derived aggregate fields are ignored."""
        package = self._get_by_id(package_id)
        if "destination_id" in changes:
            self._check_destination(changes["destination_id"])

        with transaction(self.session):
            for key, value in changes.items():
                if key in DERIVED_FIELDS:
                    continue
                setattr(package, key, value)

        logger.info(f"Package {package.id} updated", extra={"fields": sorted(changes)})
        self._publish(package)
        return package

    def delete_package(self, package_id: UUID) -> None:
        """Delete a package together with its reviews."""
        package = self._get_by_id(package_id)
        slug = package.slug

        with transaction(self.session):
            self.session.delete(package)

        logger.info(f"Package {package_id} deleted")
        self.event_bus.publish(ContentChanged(paths=("/", "/packages", f"/packages/{slug}")))

    def duplicate_package(self, package_id: UUID) -> Package:
        """
        Copy a package as an unpublished draft.

        The copy is named "<name> (Copy)", gets a '-copy[-N]' slug, and is
        INACTIVE and not featured.
        """
        original = self._get_by_id(package_id)

        with transaction(self.session):
            duplicate = Package(
                name=f"{original.name} (Copy)",
                slug=copy_slug(original.slug, self._slug_exists),
                featured=False,
                status=PackageStatus.INACTIVE,
                **{field: getattr(original, field) for field in COPIED_FIELDS},
            )
            self.session.add(duplicate)

        logger.info(f"Package {original.id} duplicated as {duplicate.id}")
        self.event_bus.publish(ContentChanged(paths=("/", "/packages")))
        return duplicate

    def _check_destination(self, destination_id: Optional[UUID]) -> None:
        if destination_id and self.session.get(Destination, destination_id) is None:
            raise NotFoundException("Destination", str(destination_id))

    def _publish(self, package: Package) -> None:
        self.event_bus.publish(
            ContentChanged(paths=("/", "/packages", f"/packages/{package.slug}"))
        )


def _parse_price(value: Optional[str]) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None
