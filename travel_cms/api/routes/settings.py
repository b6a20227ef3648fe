"""
Site settings API routes.

The public site reads company and contact details from here; admins edit them.
"""
from datetime import datetime
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from travel_cms.api.dependencies import get_db, require_admin
from travel_cms.api.schemas import CamelModel
from travel_cms.models.users import User
from travel_cms.services.settings_service import SettingsService


class SiteSettingsFields(CamelModel):
    company_name: Optional[str] = None
    tagline: Optional[str] = None
    description: Optional[str] = None
    website: Optional[str] = None
    phone: Optional[str] = None
    phone2: Optional[str] = None
    whatsapp: Optional[str] = None
    emergency_phone: Optional[str] = None
    email: Optional[str] = None
    support_email: Optional[str] = None
    address: Optional[str] = None
    facebook: Optional[str] = None
    instagram: Optional[str] = None
    twitter: Optional[str] = None
    youtube: Optional[str] = None


class SiteSettingsResponse(SiteSettingsFields):
    id: UUID
    company_name: str
    created_at: datetime
    updated_at: datetime


router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("", response_model=SiteSettingsResponse)
def get_settings(db: Session = Depends(get_db)) -> SiteSettingsResponse:
    """Current settings; defaults are stored on the first request."""
    return SiteSettingsResponse.model_validate(SettingsService(db).get_or_create())


@router.put("", response_model=SiteSettingsResponse)
def update_settings(
    request: SiteSettingsFields,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> SiteSettingsResponse:
    """Update only the fields sent; explicit nulls clear optional fields."""
    site_settings = SettingsService(db).update(request.model_dump(exclude_unset=True))
    return SiteSettingsResponse.model_validate(site_settings)
