"""
Testimonial API routes.
"""
from typing import List, Optional, Union
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from travel_cms.api.dependencies import get_db, get_optional_user, is_admin, require_admin
from travel_cms.api.middleware.error_handler import UnauthorizedException, ValidationException
from travel_cms.api.schemas import CamelModel, MessageResponse, TestimonialResponse
from travel_cms.models.users import User
from travel_cms.services.testimonial_service import TestimonialService


class TestimonialCreateRequest(CamelModel):
    name: Optional[str] = None
    email: Optional[str] = None
    location: Optional[str] = None
    rating: Optional[Union[int, str]] = None
    comment: Optional[str] = None
    image: Optional[str] = None
    package_id: Optional[UUID] = None
    trip_date: Optional[str] = None
    featured: Optional[bool] = None
    status: Optional[str] = None


class TestimonialModerateRequest(CamelModel):
    id: Optional[UUID] = None
    status: Optional[str] = None
    verified: Optional[bool] = None
    featured: Optional[bool] = None


class TestimonialListResponse(CamelModel):
    testimonials: List[TestimonialResponse]
    total: int
    page: int
    total_pages: int


class TestimonialEnvelope(CamelModel):
    testimonial: TestimonialResponse


router = APIRouter(prefix="/testimonials", tags=["testimonials"])


@router.get("", response_model=TestimonialListResponse)
def list_testimonials(
    include_all: bool = Query(False, alias="includeAll"),
    testimonial_status: Optional[str] = Query(None, alias="status"),
    featured: bool = Query(False),
    sort: Optional[str] = Query(None, description="'newest' to ignore featured ordering"),
    page: Optional[int] = Query(None, ge=1),
    limit: Optional[int] = Query(None, ge=1),
    user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db),
) -> TestimonialListResponse:
    """List APPROVED testimonials; includeAll=true (admin) lists every status."""
    if include_all and not is_admin(user):
        raise UnauthorizedException()

    result = TestimonialService(db).list_testimonials(
        include_all=include_all,
        status=testimonial_status,
        featured=featured,
        sort=sort,
        page=page,
        limit=limit,
    )
    return TestimonialListResponse(**result)


@router.post("", response_model=TestimonialResponse, status_code=status.HTTP_201_CREATED)
def create_testimonial(
    request: TestimonialCreateRequest,
    user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db),
) -> TestimonialResponse:
    """Submit a testimonial. Visitor entries wait for moderation."""
    testimonial = TestimonialService(db).create_testimonial(
        request.model_dump(),
        is_admin=is_admin(user),
    )
    return TestimonialResponse.model_validate(testimonial)


@router.put("", response_model=TestimonialEnvelope)
def moderate_testimonial(
    request: TestimonialModerateRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> TestimonialEnvelope:
    if request.id is None or not request.status:
        raise ValidationException("Testimonial ID and status are required")

    testimonial = TestimonialService(db).moderate_testimonial(
        request.id,
        request.status,
        verified=request.verified,
        featured=request.featured,
    )
    return TestimonialEnvelope(testimonial=TestimonialResponse.model_validate(testimonial))


@router.delete("", response_model=MessageResponse)
def delete_testimonial(
    id: Optional[UUID] = Query(None, description="Testimonial ID"),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> MessageResponse:
    if id is None:
        raise ValidationException("Testimonial ID is required")

    TestimonialService(db).delete_testimonial(id)
    return MessageResponse(message="Testimonial deleted successfully")
