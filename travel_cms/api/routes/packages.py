"""
Package API routes.

Public listing and detail; admin create, update, delete and duplicate.
"""
from typing import Any, Dict, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from travel_cms.api.dependencies import get_db, require_admin
from travel_cms.api.schemas import CamelModel, MessageResponse, PackageResponse, package_response
from travel_cms.models.packages import Difficulty, PackageStatus, PackageType
from travel_cms.models.users import User
from travel_cms.services.package_service import PackageService


# Columns an update may explicitly clear with null
CLEARABLE_FIELDS = frozenset({
    "destination_id", "destination_name", "location", "image", "original_price",
    "duration", "group_size", "description", "itinerary", "faqs", "policies",
    "best_time", "badge",
})


class PackageFields(CamelModel):
    """Editable package fields. Derived rating/review counts are not accepted."""
    name: Optional[str] = None
    destination_id: Optional[UUID] = None
    destination_name: Optional[str] = None
    location: Optional[str] = None
    country: Optional[str] = None
    image: Optional[str] = None
    images: Optional[List[str]] = None
    price: Optional[float] = None
    original_price: Optional[float] = None
    duration: Optional[str] = None
    group_size: Optional[str] = None
    description: Optional[str] = None
    highlights: Optional[List[str]] = None
    inclusions: Optional[List[str]] = None
    exclusions: Optional[List[str]] = None
    itinerary: Optional[List[Any]] = None
    faqs: Optional[List[Any]] = None
    policies: Optional[Dict[str, Any]] = None
    best_time: Optional[str] = None
    difficulty: Optional[Difficulty] = None
    type: Optional[PackageType] = None
    badge: Optional[str] = None
    status: Optional[PackageStatus] = None
    featured: Optional[bool] = None


def update_changes(request: CamelModel, clearable: frozenset) -> Dict[str, Any]:
    """Fields the client actually sent; nulls only survive for clearable columns."""
    return {
        key: value
        for key, value in request.model_dump(exclude_unset=True).items()
        if value is not None or key in clearable
    }


router = APIRouter(prefix="/packages", tags=["packages"])


@router.get("", response_model=List[PackageResponse])
def list_packages(
    package_status: Optional[PackageStatus] = Query(None, alias="status"),
    package_type: Optional[PackageType] = Query(None, alias="type"),
    featured: bool = Query(False),
    destination_id: Optional[UUID] = Query(None, alias="destinationId"),
    destination: Optional[str] = Query(None, description="Substring of the destination name"),
    min_price: Optional[str] = Query(None, alias="minPrice"),
    max_price: Optional[str] = Query(None, alias="maxPrice"),
    limit: Optional[int] = Query(None, ge=1),
    db: Session = Depends(get_db),
) -> List[PackageResponse]:
    """
    List packages, featured first then newest.

    Query parameters:
    - status, type: exact filters
    - featured: only featured packages when true
    - destinationId / destination: linked destination or name substring
    - minPrice, maxPrice: price bounds; values that are not numbers are ignored
    - limit: maximum number of packages
    """
    packages = PackageService(db).list_packages(
        status=package_status,
        package_type=package_type,
        featured=featured,
        destination_id=destination_id,
        destination=destination,
        min_price=min_price,
        max_price=max_price,
        limit=limit,
    )
    return [package_response(p) for p in packages]


@router.get("/{id_or_slug}", response_model=PackageResponse)
def get_package(id_or_slug: str, db: Session = Depends(get_db)) -> PackageResponse:
    """Fetch a package by id or slug."""
    return package_response(PackageService(db).get_package(id_or_slug))


@router.post("", response_model=PackageResponse, status_code=status.HTTP_201_CREATED)
def create_package(
    request: PackageFields,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> PackageResponse:
    package = PackageService(db).create_package(request.model_dump(exclude_none=True))
    return package_response(package)


@router.put("/{package_id}", response_model=PackageResponse)
def update_package(
    package_id: UUID,
    request: PackageFields,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> PackageResponse:
    package = PackageService(db).update_package(
        package_id,
        update_changes(request, CLEARABLE_FIELDS),
    )
    return package_response(package)


@router.delete("/{package_id}", response_model=MessageResponse)
def delete_package(
    package_id: UUID,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> MessageResponse:
    """Delete a package and its reviews."""
    PackageService(db).delete_package(package_id)
    return MessageResponse(message="Package deleted successfully")


@router.post(
    "/{package_id}/duplicate",
    response_model=PackageResponse,
    status_code=status.HTTP_201_CREATED,
)
def duplicate_package(
    package_id: UUID,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> PackageResponse:
    """Copy a package as an INACTIVE draft."""
    return package_response(PackageService(db).duplicate_package(package_id))
