"""
Contact inquiry API routes.

The contact form and the travel consultation popup both post here.
"""
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from travel_cms.api.dependencies import get_db, require_admin
from travel_cms.api.schemas import CamelModel, ContactResponse
from travel_cms.models.enquiries import ContactStatus, ContactType
from travel_cms.models.users import User
from travel_cms.services.enquiry_service import CONTACT_THANKS, EnquiryService


class ContactCreateRequest(CamelModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    subject: Optional[str] = None
    message: Optional[str] = None
    type: Optional[ContactType] = None
    destination: Optional[str] = None
    travel_date: Optional[str] = None
    travelers: Optional[str] = None
    budget: Optional[str] = None
    hotel_type: Optional[str] = None
    group_size: Optional[str] = None
    special_requirements: Optional[str] = None


class ContactCreatedResponse(CamelModel):
    success: bool = True
    message: str
    id: UUID


class ContactUpdateRequest(CamelModel):
    status: Optional[ContactStatus] = None
    notes: Optional[str] = None


class SuccessResponse(CamelModel):
    success: bool = True


router = APIRouter(prefix="/contact", tags=["contact"])


@router.post("", response_model=ContactCreatedResponse, status_code=status.HTTP_201_CREATED)
def create_contact(
    request: ContactCreateRequest,
    db: Session = Depends(get_db),
) -> ContactCreatedResponse:
    """Record a contact or consultation request."""
    contact = EnquiryService(db).create_contact(request.model_dump())
    return ContactCreatedResponse(message=CONTACT_THANKS, id=contact.id)


@router.get("", response_model=List[ContactResponse])
def list_contacts(
    contact_status: Optional[ContactStatus] = Query(None, alias="status"),
    contact_type: Optional[ContactType] = Query(None, alias="type"),
    limit: Optional[int] = Query(None, ge=1),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> List[ContactResponse]:
    contacts = EnquiryService(db).list_contacts(
        status=contact_status,
        contact_type=contact_type,
        limit=limit,
    )
    return [ContactResponse.model_validate(c) for c in contacts]


@router.get("/{contact_id}", response_model=ContactResponse)
def get_contact(
    contact_id: UUID,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> ContactResponse:
    return ContactResponse.model_validate(EnquiryService(db).get_contact(contact_id))


@router.put("/{contact_id}", response_model=ContactResponse)
def update_contact(
    contact_id: UUID,
    request: ContactUpdateRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> ContactResponse:
    """Update follow-up status and/or admin notes."""
    contact = EnquiryService(db).update_contact(
        contact_id,
        status=request.status,
        notes=request.notes,
        notes_given="notes" in request.model_fields_set,
    )
    return ContactResponse.model_validate(contact)


@router.delete("/{contact_id}", response_model=SuccessResponse)
def delete_contact(
    contact_id: UUID,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> SuccessResponse:
    EnquiryService(db).delete_contact(contact_id)
    return SuccessResponse()
