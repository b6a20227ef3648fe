"""
Testimonial model - site-wide traveller quotes, moderated like reviews.
"""
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4, UUID
import enum

from sqlalchemy import (
    String, Text, Integer, Boolean, DateTime, ForeignKey, CheckConstraint, Uuid,
    Enum as SQLEnum,
)
from sqlalchemy.orm import Mapped, mapped_column

from travel_cms.lib.db import Base


class TestimonialStatus(str, enum.Enum):
    """Moderation state for testimonials."""
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class Testimonial(Base):
    """
    Testimonial entity - not tied to package aggregates.
    """
    __tablename__ = "testimonials"

    id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    location: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    rating: Mapped[int] = mapped_column(Integer, nullable=False, default=5)
    comment: Mapped[str] = mapped_column(Text, nullable=False)
    image: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)
    package_id: Mapped[Optional[UUID]] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("packages.id", ondelete="SET NULL"),
        nullable=True,
    )
    trip_date: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    status: Mapped[TestimonialStatus] = mapped_column(
        SQLEnum(TestimonialStatus, name="testimonial_status"),
        nullable=False,
        default=TestimonialStatus.PENDING,
        index=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        CheckConstraint(
            "rating >= 1 AND rating <= 5",
            name="testimonial_rating_range",
        ),
    )

    def __repr__(self) -> str:
        return f"<Testimonial(id={self.id}, name={self.name}, status={self.status})>"
