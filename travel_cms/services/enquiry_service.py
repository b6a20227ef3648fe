"""Booking enquiries and contact inquiries.

Both forms are public. Each new record is logged as a structured line for
follow-up; email delivery happens outside this service.
"""
import re
from datetime import date
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from travel_cms.api.middleware.error_handler import NotFoundException, ValidationException
from travel_cms.lib.db import transaction
from travel_cms.lib.logging import get_logger, log_with_context
from travel_cms.lib.metrics import get_metrics_collector
from travel_cms.models.enquiries import (
    ContactInquiry,
    ContactStatus,
    ContactType,
    EnquiryStatus,
    PackageEnquiry,
)


logger = get_logger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
CONTACT_THANKS = "Thank you for your inquiry! We will get back to you soon."


def parse_count(value: Any, default: int) -> int:
    """
    Lenient integer parse for party sizes.

    Missing, unparseable or zero values fall back to the default.
    """
    try:
        parsed = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    return parsed or default


def parse_travel_date(value: Any) -> Optional[date]:
    if value in (None, ""):
        return None
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        raise ValidationException("Invalid travel date")


def _blank(value: Optional[str]) -> bool:
    return not (value or "").strip()


class EnquiryService:
    """Captures and manages package enquiries and contact inquiries."""

    def __init__(self, session: Session):
        self.session = session
        self.metrics = get_metrics_collector()

    # ===== Package enquiries =====

    def create_enquiry(self, data: Dict[str, Any]) -> PackageEnquiry:
        """
        Record a booking enquiry.

        Raises:
            ValidationException: name, email or phone missing
        """
        if _blank(data.get("name")) or _blank(data.get("email")) or _blank(data.get("phone")):
            raise ValidationException("Name, email, and phone are required")

        with transaction(self.session):
            enquiry = PackageEnquiry(
                name=data["name"].strip(),
                email=data["email"].strip(),
                phone=data["phone"].strip(),
                package_id=data.get("package_id") or None,
                package_name=data.get("package_name") or None,
                travel_date=parse_travel_date(data.get("travel_date")),
                travel_time=data.get("travel_time") or None,
                adults=parse_count(data.get("adults"), 1),
                children=parse_count(data.get("children"), 0),
                rooms=parse_count(data.get("rooms"), 1),
                message=data.get("message") or None,
                status=EnquiryStatus.NEW,
            )
            self.session.add(enquiry)

        log_with_context(
            logger, "info", f"New package enquiry {enquiry.id}",
            enquiry_type="package",
            package_name=enquiry.package_name,
            email=enquiry.email,
            adults=enquiry.adults,
            children=enquiry.children,
        )
        self.metrics.increment_enquiries("package")
        return enquiry

    def list_enquiries(
        self,
        status: Optional[EnquiryStatus] = None,
        package_id: Optional[UUID] = None,
    ) -> List[PackageEnquiry]:
        stmt = select(PackageEnquiry).options(selectinload(PackageEnquiry.package))
        if status:
            stmt = stmt.where(PackageEnquiry.status == status)
        if package_id:
            stmt = stmt.where(PackageEnquiry.package_id == package_id)
        stmt = stmt.order_by(PackageEnquiry.created_at.desc())
        return list(self.session.execute(stmt).scalars().all())

    def update_enquiry_status(self, enquiry_id: UUID, status: EnquiryStatus) -> PackageEnquiry:
        enquiry = self.session.get(PackageEnquiry, enquiry_id)
        if enquiry is None:
            raise NotFoundException("Enquiry", str(enquiry_id))

        with transaction(self.session):
            enquiry.status = status

        logger.info(f"Enquiry {enquiry.id} marked {status.value}")
        return enquiry

    # ===== Contact inquiries =====

    def create_contact(self, data: Dict[str, Any]) -> ContactInquiry:
        """
        Record a contact form or consultation request.

        Raises:
            ValidationException: name, email or message missing, or a malformed email
        """
        if _blank(data.get("name")) or _blank(data.get("email")) or _blank(data.get("message")):
            raise ValidationException("Name, email and message are required")
        email = data["email"].strip()
        if not EMAIL_PATTERN.match(email):
            raise ValidationException("Please provide a valid email address")

        try:
            contact_type = ContactType(data.get("type") or ContactType.CONTACT)
        except ValueError:
            raise ValidationException("Invalid inquiry type")

        with transaction(self.session):
            contact = ContactInquiry(
                name=data["name"].strip(),
                email=email,
                phone=data.get("phone") or None,
                subject=data.get("subject") or "Travel Consultation",
                message=data["message"],
                type=contact_type,
                destination=data.get("destination") or None,
                travel_date=data.get("travel_date") or None,
                travelers=data.get("travelers") or None,
                budget=data.get("budget") or None,
                hotel_type=data.get("hotel_type") or None,
                group_size=data.get("group_size") or None,
                special_requirements=data.get("special_requirements") or None,
                status=ContactStatus.NEW,
            )
            self.session.add(contact)

        log_with_context(
            logger, "info", f"New contact inquiry {contact.id}",
            enquiry_type=contact.type.value.lower(),
            email=contact.email,
            subject=contact.subject,
        )
        self.metrics.increment_enquiries(contact.type.value)
        return contact

    def list_contacts(
        self,
        status: Optional[ContactStatus] = None,
        contact_type: Optional[ContactType] = None,
        limit: Optional[int] = None,
    ) -> List[ContactInquiry]:
        stmt = select(ContactInquiry)
        if status:
            stmt = stmt.where(ContactInquiry.status == status)
        if contact_type:
            stmt = stmt.where(ContactInquiry.type == contact_type)
        stmt = stmt.order_by(ContactInquiry.created_at.desc())
        if limit:
            stmt = stmt.limit(limit)
        return list(self.session.execute(stmt).scalars().all())

    def get_contact(self, contact_id: UUID) -> ContactInquiry:
        contact = self.session.get(ContactInquiry, contact_id)
        if contact is None:
            raise NotFoundException("Contact inquiry", str(contact_id))
        return contact

    def update_contact(
        self,
        contact_id: UUID,
        status: Optional[ContactStatus] = None,
        notes: Optional[str] = None,
        notes_given: bool = False,
    ) -> ContactInquiry:
        """Update status and/or notes; notes may be cleared by passing None explicitly."""
        contact = self.get_contact(contact_id)

        with transaction(self.session):
            if status:
                contact.status = status
            if notes_given:
                contact.notes = notes

        return contact

    def delete_contact(self, contact_id: UUID) -> None:
        contact = self.get_contact(contact_id)
        with transaction(self.session):
            self.session.delete(contact)
        logger.info(f"Contact inquiry {contact_id} deleted")
