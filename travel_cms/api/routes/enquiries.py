"""
Package enquiry API routes.

Mounted under /packages/enquiry and registered ahead of the package
routes so "enquiry" is never read as a package slug.
"""
from datetime import date
from typing import List, Optional, Union
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from travel_cms.api.dependencies import get_db, require_admin
from travel_cms.api.schemas import CamelModel, EnquiryResponse
from travel_cms.models.enquiries import EnquiryStatus
from travel_cms.models.users import User
from travel_cms.services.enquiry_service import EnquiryService


class EnquiryCreateRequest(CamelModel):
    """Booking form; party sizes may arrive as numbers or strings."""
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    package_id: Optional[UUID] = None
    package_name: Optional[str] = None
    travel_date: Optional[Union[date, str]] = None
    travel_time: Optional[str] = None
    adults: Optional[Union[int, str]] = None
    children: Optional[Union[int, str]] = None
    rooms: Optional[Union[int, str]] = None
    message: Optional[str] = None


class EnquiryStatusRequest(CamelModel):
    status: EnquiryStatus


router = APIRouter(prefix="/packages/enquiry", tags=["enquiries"])


@router.post("", response_model=EnquiryResponse, status_code=status.HTTP_201_CREATED)
def create_enquiry(
    request: EnquiryCreateRequest,
    db: Session = Depends(get_db),
) -> EnquiryResponse:
    """Capture a booking enquiry from a package page."""
    enquiry = EnquiryService(db).create_enquiry(request.model_dump())
    return EnquiryResponse.model_validate(enquiry)


@router.get("", response_model=List[EnquiryResponse])
def list_enquiries(
    enquiry_status: Optional[EnquiryStatus] = Query(None, alias="status"),
    package_id: Optional[UUID] = Query(None, alias="packageId"),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> List[EnquiryResponse]:
    """List enquiries newest first, each with a summary of its package."""
    enquiries = EnquiryService(db).list_enquiries(status=enquiry_status, package_id=package_id)
    return [EnquiryResponse.model_validate(e) for e in enquiries]


@router.put("/{enquiry_id}", response_model=EnquiryResponse)
def update_enquiry(
    enquiry_id: UUID,
    request: EnquiryStatusRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> EnquiryResponse:
    enquiry = EnquiryService(db).update_enquiry_status(enquiry_id, request.status)
    return EnquiryResponse.model_validate(enquiry)
