"""Site-wide company, contact and social settings."""
from typing import Any, Dict, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from travel_cms.api.middleware.error_handler import ValidationException
from travel_cms.lib.db import transaction
from travel_cms.lib.events import ContentChanged, EventBus, get_event_bus
from travel_cms.lib.logging import get_logger
from travel_cms.models.site_settings import SiteSettings


logger = get_logger(__name__)

DEFAULT_SITE_SETTINGS: Dict[str, Any] = {
    "company_name": "Thapa Holidays",
    "tagline": "Discover Amazing Places",
    "phone": "+91 9002660557",
    "phone2": "+91 8617410057",
    "whatsapp": "+919002660557",
    "email": "thapa.holidays09@gmail.com",
    "support_email": "thapa.holidays09@gmail.com",
    "address": (
        "Vastu Vihar, Near Steel Factory, Panchkulgari\n"
        "P.O. Matigara, Dist Darjeeling, Pin: 734010"
    ),
    "emergency_phone": "+91 9002660557",
    "website": "https://thapaholidays.com",
    "description": (
        "Your trusted travel partner for over 15 years. We create unforgettable "
        "experiences and help you discover the incredible beauty of India and beyond."
    ),
    "facebook": "https://facebook.com/thapaholidays",
    "instagram": "https://instagram.com/thapaholidays",
    "twitter": "https://twitter.com/thapaholidays",
    "youtube": "https://youtube.com/thapaholidays",
}


class SettingsService:
    """Reads and updates the single site settings row.

    Args:
        session: SQLAlchemy session for database operations
        event_bus: Where page invalidation events are published
    """

    def __init__(self, session: Session, event_bus: Optional[EventBus] = None):
        self.session = session
        self.event_bus = event_bus or get_event_bus()

    def _current(self) -> Optional[SiteSettings]:
        return self.session.execute(
            select(SiteSettings).order_by(SiteSettings.created_at).limit(1)
        ).scalar_one_or_none()

    def get_or_create(self) -> SiteSettings:
        """Return the settings, creating the default row on first read."""
        site_settings = self._current()
        if site_settings is not None:
            return site_settings

        with transaction(self.session):
            site_settings = SiteSettings(**DEFAULT_SITE_SETTINGS)
            self.session.add(site_settings)

        logger.info("Default site settings created")
        return site_settings

    def update(self, changes: Dict[str, Any]) -> SiteSettings:
        """
        Apply a partial update, creating the row from defaults if missing.

        Raises:
            ValidationException: company name set to blank
        """
        if "company_name" in changes and not (changes["company_name"] or "").strip():
            raise ValidationException("Company name is required")

        site_settings = self._current()
        with transaction(self.session):
            if site_settings is None:
                site_settings = SiteSettings(**{**DEFAULT_SITE_SETTINGS, **changes})
                self.session.add(site_settings)
            else:
                for field, value in changes.items():
                    setattr(site_settings, field, value)

        logger.info("Site settings updated", extra={"fields": sorted(changes)})
        self.event_bus.publish(ContentChanged(paths=("/",)))
        return site_settings
