"""
Enquiry models - booking enquiries on packages and general contact inquiries.
"""
from datetime import datetime, date, timezone
from typing import Optional, TYPE_CHECKING
from uuid import uuid4, UUID
import enum

from sqlalchemy import String, Text, Integer, Date, DateTime, ForeignKey, Uuid, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from travel_cms.lib.db import Base

if TYPE_CHECKING:
    from travel_cms.models.packages import Package


class EnquiryStatus(str, enum.Enum):
    """Package enquiry follow-up state."""
    NEW = "NEW"
    CONTACTED = "CONTACTED"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"


class ContactType(str, enum.Enum):
    """Which public form produced the inquiry."""
    CONTACT = "CONTACT"
    CONSULTATION = "CONSULTATION"


class ContactStatus(str, enum.Enum):
    """Contact inquiry follow-up state."""
    NEW = "NEW"
    IN_PROGRESS = "IN_PROGRESS"
    RESOLVED = "RESOLVED"
    CLOSED = "CLOSED"


class PackageEnquiry(Base):
    """
    Package enquiry entity - booking request captured from a package page.
    """
    __tablename__ = "package_enquiries"

    id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )

    # Contact
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    phone: Mapped[str] = mapped_column(String(50), nullable=False)

    # Package (kept when the package is deleted, name snapshot retained)
    package_id: Mapped[Optional[UUID]] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("packages.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    package_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    # Trip
    travel_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    travel_time: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    adults: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    children: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    rooms: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    message: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    status: Mapped[EnquiryStatus] = mapped_column(
        SQLEnum(EnquiryStatus, name="enquiry_status"),
        nullable=False,
        default=EnquiryStatus.NEW,
        index=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )

    package: Mapped[Optional["Package"]] = relationship()

    def __repr__(self) -> str:
        return f"<PackageEnquiry(id={self.id}, email={self.email}, status={self.status})>"


class ContactInquiry(Base):
    """
    Contact inquiry entity - contact form and travel consultation requests.
    """
    __tablename__ = "contact_inquiries"

    id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    subject: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        default="Travel Consultation",
    )
    message: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[ContactType] = mapped_column(
        SQLEnum(ContactType, name="contact_type"),
        nullable=False,
        default=ContactType.CONTACT,
    )

    # Travel consultation details
    destination: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    travel_date: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    travelers: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    budget: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    hotel_type: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    group_size: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    special_requirements: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    status: Mapped[ContactStatus] = mapped_column(
        SQLEnum(ContactStatus, name="contact_status"),
        nullable=False,
        default=ContactStatus.NEW,
        index=True,
    )
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        return f"<ContactInquiry(id={self.id}, email={self.email}, type={self.type})>"
