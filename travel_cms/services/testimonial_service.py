"""Testimonial submission and moderation.

Testimonials follow the review moderation states but feed no aggregate.
"""
import math
from typing import Any, Dict, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from travel_cms.api.middleware.error_handler import NotFoundException, ValidationException
from travel_cms.lib.db import transaction
from travel_cms.lib.events import ContentChanged, EventBus, get_event_bus
from travel_cms.lib.logging import get_logger
from travel_cms.models.testimonials import Testimonial, TestimonialStatus
from travel_cms.services.enquiry_service import parse_count


logger = get_logger(__name__)


def parse_testimonial_status(value: Any) -> TestimonialStatus:
    if isinstance(value, TestimonialStatus):
        return value
    try:
        return TestimonialStatus(str(value).upper())
    except ValueError:
        raise ValidationException("Invalid status")


class TestimonialService:
    """Testimonial reads, submissions and admin moderation."""

    def __init__(self, session: Session, event_bus: Optional[EventBus] = None):
        self.session = session
        self.event_bus = event_bus or get_event_bus()

    def list_testimonials(
        self,
        include_all: bool = False,
        status: Optional[str] = None,
        featured: bool = False,
        sort: Optional[str] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> dict:
        """
        List testimonials; public callers only see APPROVED ones.

        Default order is featured first then newest; sort="newest" drops
        the featured preference. Without a limit everything is returned on
        a single page.
        """
        conditions = []
        if not include_all:
            conditions.append(Testimonial.status == TestimonialStatus.APPROVED)
        elif status:
            conditions.append(Testimonial.status == parse_testimonial_status(status))
        if featured:
            conditions.append(Testimonial.featured.is_(True))

        if sort == "newest":
            order = [Testimonial.created_at.desc()]
        else:
            order = [Testimonial.featured.desc(), Testimonial.created_at.desc()]

        stmt = select(Testimonial).where(*conditions).order_by(*order)
        current_page = page or 1
        if limit:
            stmt = stmt.offset((current_page - 1) * limit).limit(limit)

        testimonials = self.session.execute(stmt).scalars().all()
        total = self.session.execute(
            select(func.count(Testimonial.id)).where(*conditions)
        ).scalar_one()

        return {
            "testimonials": list(testimonials),
            "total": total,
            "page": current_page,
            "total_pages": math.ceil(total / limit) if limit else 1,
        }

    def create_testimonial(self, data: Dict[str, Any], is_admin: bool = False) -> Testimonial:
        """
        Store a testimonial.

        Public submissions always start PENDING and unfeatured. Admin callers
        may set status and featured; their entries default to APPROVED.
        """
        if not (data.get("name") or "").strip() or not (data.get("comment") or "").strip():
            raise ValidationException("Name and comment are required")

        rating = parse_count(data.get("rating"), 5)
        if not 1 <= rating <= 5:
            raise ValidationException("Rating must be between 1 and 5")

        status = TestimonialStatus.PENDING
        featured = False
        if is_admin:
            status = (
                parse_testimonial_status(data["status"])
                if data.get("status")
                else TestimonialStatus.APPROVED
            )
            featured = bool(data.get("featured"))

        with transaction(self.session):
            testimonial = Testimonial(
                name=data["name"].strip(),
                email=data.get("email") or None,
                location=data.get("location") or "",
                rating=rating,
                comment=data["comment"].strip(),
                image=data.get("image") or None,
                package_id=data.get("package_id") or None,
                trip_date=data.get("trip_date") or None,
                featured=featured,
                status=status,
            )
            self.session.add(testimonial)

        logger.info(
            f"Testimonial {testimonial.id} created",
            extra={"status": status.value, "by_admin": is_admin},
        )
        self._publish()
        return testimonial

    def moderate_testimonial(
        self,
        testimonial_id: UUID,
        status: Any,
        verified: Optional[bool] = None,
        featured: Optional[bool] = None,
    ) -> Testimonial:
        """Set status; featured falls back to False when omitted."""
        new_status = parse_testimonial_status(status)
        testimonial = self._get(testimonial_id)

        with transaction(self.session):
            testimonial.status = new_status
            testimonial.featured = bool(featured) if featured is not None else False
            if verified is not None:
                testimonial.verified = verified

        logger.info(f"Testimonial {testimonial.id} moderated to {new_status.value}")
        self._publish()
        return testimonial

    def delete_testimonial(self, testimonial_id: UUID) -> None:
        testimonial = self._get(testimonial_id)
        with transaction(self.session):
            self.session.delete(testimonial)
        logger.info(f"Testimonial {testimonial_id} deleted")
        self._publish()

    def _get(self, testimonial_id: UUID) -> Testimonial:
        testimonial = self.session.get(Testimonial, testimonial_id)
        if testimonial is None:
            raise NotFoundException("Testimonial", str(testimonial_id))
        return testimonial

    def _publish(self) -> None:
        self.event_bus.publish(ContentChanged(paths=("/",)))
