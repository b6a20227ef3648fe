"""
Public search API route.
"""
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from travel_cms.api.dependencies import get_db
from travel_cms.api.schemas import CamelModel
from travel_cms.services.search_service import SearchService


class SearchResult(CamelModel):
    """One hit; price is only present for packages, image is always present."""
    id: UUID
    type: str
    title: str
    subtitle: str
    price: Optional[float] = None
    href: str
    image: Optional[str] = None
    rating: float


class SearchCounts(CamelModel):
    packages: int
    destinations: int


class SearchResponse(CamelModel):
    results: List[SearchResult]
    counts: Optional[SearchCounts] = None


router = APIRouter(prefix="/search", tags=["search"])


@router.get("", response_model=SearchResponse, response_model_exclude_unset=True)
def search(
    q: Optional[str] = Query(None, description="Search text, at least 2 characters"),
    db: Session = Depends(get_db),
) -> SearchResponse:
    """
    Search ACTIVE packages and destinations by name and location.

    Returns at most 6 packages followed by at most 4 destinations.
    """
    return SearchResponse(**SearchService(db).search(q))
