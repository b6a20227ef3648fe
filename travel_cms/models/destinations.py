"""
Destination model - places the agency sells trips to.
"""
from datetime import datetime, timezone
from typing import Optional, TYPE_CHECKING
from uuid import uuid4, UUID
import enum

from sqlalchemy import String, Text, Float, Boolean, DateTime, JSON, Uuid, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from travel_cms.lib.db import Base

if TYPE_CHECKING:
    from travel_cms.models.packages import Package


class Region(str, enum.Enum):
    """Destination grouping tag used for filtering."""
    INDIA = "INDIA"
    WORLD = "WORLD"


class DestinationCategory(str, enum.Enum):
    """Destination category enumeration."""
    MOUNTAIN = "MOUNTAIN"
    BEACH = "BEACH"
    HERITAGE = "HERITAGE"
    WILDLIFE = "WILDLIFE"
    ADVENTURE = "ADVENTURE"
    SPIRITUAL = "SPIRITUAL"
    CITY = "CITY"


class DestinationStatus(str, enum.Enum):
    """Publication status."""
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class Destination(Base):
    """
    Destination entity - listed on the destinations page and linked from packages.
    """
    __tablename__ = "destinations"

    # Primary key
    id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    country: Mapped[str] = mapped_column(String(100), nullable=False, default="India")
    region: Mapped[Region] = mapped_column(
        SQLEnum(Region, name="destination_region"),
        nullable=False,
        default=Region.INDIA,
        index=True,
    )
    category: Mapped[DestinationCategory] = mapped_column(
        SQLEnum(DestinationCategory, name="destination_category"),
        nullable=False,
        default=DestinationCategory.MOUNTAIN,
        index=True,
    )

    # Content
    image: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)
    images: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    highlights: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    best_time: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    # Listing
    status: Mapped[DestinationStatus] = mapped_column(
        SQLEnum(DestinationStatus, name="destination_status"),
        nullable=False,
        default=DestinationStatus.ACTIVE,
        index=True,
    )
    featured: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    rating: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)

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

    packages: Mapped[list["Package"]] = relationship(back_populates="destination")

    def __repr__(self) -> str:
        return f"<Destination(id={self.id}, name={self.name}, region={self.region})>"
