"""
Destination API routes.
"""
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from travel_cms.api.dependencies import get_db, require_admin
from travel_cms.api.routes.packages import update_changes
from travel_cms.api.schemas import (
    CamelModel,
    DestinationResponse,
    MessageResponse,
    PackageResponse,
    package_response,
)
from travel_cms.models.destinations import DestinationCategory, DestinationStatus, Region
from travel_cms.models.users import User
from travel_cms.services.destination_service import DestinationService


CLEARABLE_FIELDS = frozenset({"image", "description", "best_time"})


class DestinationFields(CamelModel):
    name: Optional[str] = None
    location: Optional[str] = None
    country: Optional[str] = None
    region: Optional[Region] = None
    category: Optional[DestinationCategory] = None
    image: Optional[str] = None
    images: Optional[List[str]] = None
    description: Optional[str] = None
    highlights: Optional[List[str]] = None
    best_time: Optional[str] = None
    status: Optional[DestinationStatus] = None
    featured: Optional[bool] = None
    rating: Optional[float] = None


class DestinationUpdateRequest(DestinationFields):
    package_ids: Optional[List[UUID]] = None


class DestinationDetailResponse(DestinationResponse):
    packages: List[PackageResponse] = []


router = APIRouter(prefix="/destinations", tags=["destinations"])


@router.get("", response_model=List[DestinationResponse])
def list_destinations(
    destination_status: Optional[DestinationStatus] = Query(None, alias="status"),
    region: Optional[Region] = Query(None),
    category: Optional[DestinationCategory] = Query(None),
    db: Session = Depends(get_db),
) -> List[DestinationResponse]:
    """List destinations by name, each with the number of linked packages."""
    rows = DestinationService(db).list_destinations(
        status=destination_status,
        region=region,
        category=category,
    )
    return [
        DestinationResponse.model_validate(destination).model_copy(
            update={"package_count": count}
        )
        for destination, count in rows
    ]


@router.get("/{id_or_slug}", response_model=DestinationDetailResponse)
def get_destination(id_or_slug: str, db: Session = Depends(get_db)) -> DestinationDetailResponse:
    """Fetch a destination by id or slug with its ACTIVE packages."""
    destination, packages = DestinationService(db).get_destination(id_or_slug)
    response = DestinationDetailResponse.model_validate(destination)
    response.package_count = len(packages)
    response.packages = [package_response(p) for p in packages]
    return response


@router.post("", response_model=DestinationResponse, status_code=status.HTTP_201_CREATED)
def create_destination(
    request: DestinationFields,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> DestinationResponse:
    destination = DestinationService(db).create_destination(request.model_dump(exclude_none=True))
    return DestinationResponse.model_validate(destination)


@router.put("/{destination_id}", response_model=DestinationResponse)
def update_destination(
    destination_id: UUID,
    request: DestinationUpdateRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> DestinationResponse:
    """Partial update; packageIds, when sent, replaces the linked packages."""
    changes = update_changes(request, CLEARABLE_FIELDS)
    package_ids = changes.pop("package_ids", None)

    service = DestinationService(db)
    destination = service.update_destination(destination_id, changes, package_ids=package_ids)
    response = DestinationResponse.model_validate(destination)
    response.package_count = service.package_count(destination.id)
    return response


@router.delete("/{destination_id}", response_model=MessageResponse)
def delete_destination(
    destination_id: UUID,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> MessageResponse:
    """Delete a destination; its packages remain without one."""
    DestinationService(db).delete_destination(destination_id)
    return MessageResponse(message="Destination deleted successfully")
