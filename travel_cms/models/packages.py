"""
Package model - bookable tour packages.
"""
from datetime import datetime, timezone
from typing import Optional, TYPE_CHECKING
from uuid import uuid4, UUID
import enum

from sqlalchemy import (
    String, Text, Numeric, Float, Integer, Boolean, DateTime, ForeignKey, JSON, Uuid,
    Enum as SQLEnum,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from travel_cms.lib.db import Base

if TYPE_CHECKING:
    from travel_cms.models.destinations import Destination
    from travel_cms.models.reviews import Review


class PackageStatus(str, enum.Enum):
    """Publication status; only ACTIVE packages are public."""
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    DRAFT = "DRAFT"


class PackageType(str, enum.Enum):
    """Package tier."""
    BUDGET = "BUDGET"
    STANDARD = "STANDARD"
    PREMIUM = "PREMIUM"
    LUXURY = "LUXURY"


class Difficulty(str, enum.Enum):
    """Trip difficulty."""
    EASY = "EASY"
    MODERATE = "MODERATE"
    CHALLENGING = "CHALLENGING"


class Package(Base):
    """
    Package entity - tour offering with denormalized review aggregates.

    `rating` and `reviews` are derived from APPROVED reviews and are only
    written by the rating aggregator.
    """
    __tablename__ = "packages"

    # Primary key
    id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)

    # Where
    destination_id: Mapped[Optional[UUID]] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("destinations.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    destination_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    country: Mapped[str] = mapped_column(String(100), nullable=False, default="India")

    # Media
    image: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)
    images: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    # Pricing and duration
    price: Mapped[float] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=False)
    original_price: Mapped[Optional[float]] = mapped_column(
        Numeric(10, 2, asdecimal=False),
        nullable=True,
    )
    duration: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    group_size: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    # Content
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    highlights: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    inclusions: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    exclusions: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    itinerary: Mapped[Optional[list]] = mapped_column(JSON, nullable=True)
    faqs: Mapped[Optional[list]] = mapped_column(JSON, nullable=True)
    policies: Mapped[Optional[dict]] = mapped_column(JSON, nullable=True)
    best_time: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    difficulty: Mapped[Difficulty] = mapped_column(
        SQLEnum(Difficulty, name="package_difficulty"),
        nullable=False,
        default=Difficulty.EASY,
    )
    type: Mapped[PackageType] = mapped_column(
        SQLEnum(PackageType, name="package_type"),
        nullable=False,
        default=PackageType.PREMIUM,
        index=True,
    )
    badge: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    # Derived review aggregates
    rating: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    reviews: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Listing
    status: Mapped[PackageStatus] = mapped_column(
        SQLEnum(PackageStatus, name="package_status"),
        nullable=False,
        default=PackageStatus.ACTIVE,
        index=True,
    )
    featured: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    destination: Mapped[Optional["Destination"]] = relationship(back_populates="packages")
    review_entries: Mapped[list["Review"]] = relationship(
        back_populates="package",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Package(id={self.id}, slug={self.slug}, status={self.status})>"
