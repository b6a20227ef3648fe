"""
Review API routes.

Public visitors list approved reviews, submit new ones and cast helpful
votes; admins list everything, moderate and delete.
"""
from typing import List, Optional, Union
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from travel_cms.api.dependencies import get_db, get_optional_user, is_admin, require_admin
from travel_cms.api.middleware.error_handler import UnauthorizedException, ValidationException
from travel_cms.api.schemas import (
    CamelModel,
    MessageResponse,
    PublicReviewResponse,
    ReviewResponse,
)
from travel_cms.models.users import User
from travel_cms.services.review_service import (
    DEFAULT_PAGE_SIZE,
    PENDING_MESSAGE,
    ReviewService,
)


# Request schemas
class ReviewCreateRequest(CamelModel):
    """Visitor review; required fields are checked by the service for exact messages."""
    package_id: Optional[UUID] = None
    name: Optional[str] = None
    email: Optional[str] = None
    location: Optional[str] = None
    rating: Optional[int] = None
    title: Optional[str] = None
    comment: Optional[str] = None
    images: Optional[List[str]] = None


class ReviewModerateRequest(CamelModel):
    id: Optional[UUID] = None
    status: Optional[str] = None
    verified: Optional[bool] = None


class ReviewVoteRequest(CamelModel):
    id: Optional[UUID] = None
    action: Optional[str] = None


# Response schemas
class PublicReviewListResponse(CamelModel):
    reviews: List[PublicReviewResponse]
    total: int
    page: int
    total_pages: int


class ReviewListResponse(PublicReviewListResponse):
    """Back-office listing; includes reviewer emails."""
    reviews: List[ReviewResponse]


class ReviewSubmitResponse(CamelModel):
    review: ReviewResponse
    message: str


class ReviewEnvelope(CamelModel):
    review: ReviewResponse


class HelpfulCount(CamelModel):
    id: UUID
    helpful: int


class HelpfulVoteResponse(CamelModel):
    review: HelpfulCount


# Router
router = APIRouter(prefix="/reviews", tags=["reviews"])


# The payload model depends on the caller, so it is serialized as returned
@router.get("", response_model=None)
def list_reviews(
    package_id: Optional[UUID] = Query(None, alias="packageId"),
    status: Optional[str] = Query(None, description="Status filter (admin only)"),
    page: int = Query(1),
    limit: int = Query(DEFAULT_PAGE_SIZE),
    include_all: bool = Query(False, alias="includeAll"),
    user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db),
) -> Union[ReviewListResponse, PublicReviewListResponse]:
    """
    List reviews, newest first.

    Public callers must pass packageId and only get APPROVED reviews, without
    reviewer emails. includeAll=true needs an admin token, enables the status
    filter and returns emails.
    """
    if include_all and not is_admin(user):
        raise UnauthorizedException()

    result = ReviewService(db).list_reviews(
        package_id=package_id,
        status=status,
        page=page,
        limit=limit,
        include_all=include_all,
    )
    if include_all:
        return ReviewListResponse(**result)
    return PublicReviewListResponse(**result)


@router.post("", response_model=ReviewSubmitResponse)
def submit_review(
    request: ReviewCreateRequest,
    db: Session = Depends(get_db),
) -> ReviewSubmitResponse:
    """Submit a review; it stays hidden until an admin approves it."""
    review = ReviewService(db).submit_review(
        package_id=request.package_id,
        name=request.name,
        comment=request.comment,
        rating=request.rating,
        email=request.email,
        location=request.location,
        title=request.title,
        images=request.images,
    )
    return ReviewSubmitResponse(
        review=ReviewResponse.model_validate(review),
        message=PENDING_MESSAGE,
    )


@router.put("", response_model=ReviewEnvelope)
def moderate_review(
    request: ReviewModerateRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> ReviewEnvelope:
    """Approve, reject or reset a review to pending."""
    if request.id is None or not request.status:
        raise ValidationException("Review ID and status are required")

    review = ReviewService(db).moderate_review(
        request.id,
        request.status,
        verified=request.verified,
    )
    return ReviewEnvelope(review=ReviewResponse.model_validate(review))


@router.patch("", response_model=HelpfulVoteResponse)
def vote_helpful(
    request: ReviewVoteRequest,
    db: Session = Depends(get_db),
) -> HelpfulVoteResponse:
    """Count a helpful vote. Anonymous and not deduplicated."""
    if request.id is None or not request.action:
        raise ValidationException("Review ID and action are required")
    if request.action != "helpful":
        raise ValidationException("Invalid action")

    review = ReviewService(db).mark_helpful(request.id)
    return HelpfulVoteResponse(review=HelpfulCount(id=review.id, helpful=review.helpful))


@router.delete("", response_model=MessageResponse)
def delete_review(
    id: Optional[UUID] = Query(None, description="Review ID"),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> MessageResponse:
    if id is None:
        raise ValidationException("Review ID is required")

    ReviewService(db).delete_review(id)
    return MessageResponse(message="Review deleted successfully")
