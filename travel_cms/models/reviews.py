"""
Review model - visitor feedback on a tour package, moderated before publication.
"""
from datetime import datetime, timezone
from typing import Optional, TYPE_CHECKING
from uuid import uuid4, UUID
import enum

from sqlalchemy import (
    String, Text, Integer, Boolean, DateTime, ForeignKey, CheckConstraint, JSON, Uuid,
    Enum as SQLEnum,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from travel_cms.lib.db import Base

if TYPE_CHECKING:
    from travel_cms.models.packages import Package


class ReviewStatus(str, enum.Enum):
    """Moderation state; only APPROVED reviews count toward package aggregates."""
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class Review(Base):
    """
    Review entity - rating and comment owned by exactly one package.
    """
    __tablename__ = "reviews"

    # Primary key
    id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )

    # Owning package
    package_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("packages.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Author
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    # Rating (1-5 scale)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)

    # Content
    title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    comment: Mapped[str] = mapped_column(Text, nullable=False)
    images: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    # Moderation
    verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    helpful: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    status: Mapped[ReviewStatus] = mapped_column(
        SQLEnum(ReviewStatus, name="review_status"),
        nullable=False,
        default=ReviewStatus.PENDING,
        index=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    package: Mapped["Package"] = relationship(back_populates="review_entries")

    __table_args__ = (
        CheckConstraint(
            "rating >= 1 AND rating <= 5",
            name="review_rating_range",
        ),
    )

    def __repr__(self) -> str:
        return f"<Review(id={self.id}, package_id={self.package_id}, rating={self.rating}, status={self.status})>"
