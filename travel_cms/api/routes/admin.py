"""
Admin dashboard API routes.

All routes require an ADMIN bearer token.
"""
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from travel_cms.api.dependencies import get_db, require_admin
from travel_cms.api.schemas import CamelModel, EnquiryResponse
from travel_cms.models.users import User
from travel_cms.services.search_service import SearchService
from travel_cms.services.stats_service import StatsService


# Pydantic schemas
class DashboardCounts(CamelModel):
    total_packages: int
    total_destinations: int
    total_enquiries: int
    total_blog_posts: int
    new_enquiries: int
    pending_reviews: int
    pending_testimonials: int


class MonthlyCount(CamelModel):
    month: str
    count: int


class DashboardResponse(CamelModel):
    stats: DashboardCounts
    recent_enquiries: List[EnquiryResponse]
    monthly_enquiries: List[MonthlyCount]


class AdminSearchResult(CamelModel):
    id: UUID
    type: str
    title: str
    subtitle: Optional[str] = None
    href: str
    status: str


class AdminSearchCounts(CamelModel):
    packages: int
    destinations: int
    enquiries: int
    contacts: int
    blog_posts: int
    testimonials: int


class AdminSearchResponse(CamelModel):
    results: List[AdminSearchResult]
    counts: Optional[AdminSearchCounts] = None


# Router
router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/stats", response_model=DashboardResponse)
def dashboard_stats(
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> DashboardResponse:
    """
    Dashboard summary.

    Returns:
        Live content counts, the five latest enquiries and enquiry counts
        for each of the last six months
    """
    return DashboardResponse.model_validate(StatsService(db).dashboard())


@router.get("/search", response_model=AdminSearchResponse, response_model_exclude_unset=True)
def admin_search(
    q: Optional[str] = Query(None, description="Search text, at least 2 characters"),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> AdminSearchResponse:
    """Search every content type regardless of status, up to 5 hits per type."""
    return AdminSearchResponse(**SearchService(db).admin_search(q))
