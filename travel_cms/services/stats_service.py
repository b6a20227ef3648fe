"""Admin dashboard statistics."""
from datetime import datetime, timezone
from typing import Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from travel_cms.models.blog_posts import BlogPost
from travel_cms.models.destinations import Destination, DestinationStatus
from travel_cms.models.enquiries import EnquiryStatus, PackageEnquiry
from travel_cms.models.packages import Package, PackageStatus
from travel_cms.models.reviews import Review, ReviewStatus
from travel_cms.models.testimonials import Testimonial, TestimonialStatus


RECENT_ENQUIRIES = 5
MONTHS = 6


def month_keys(now: datetime, months: int = MONTHS) -> List[str]:
    """
    'YYYY-MM' keys for the last `months` calendar months, oldest first,
    including the current one.

    Example:
        >>> month_keys(datetime(2026, 2, 10), 3)
        ['2025-12', '2026-01', '2026-02']
    """
    keys = []
    year, month = now.year, now.month
    for _ in range(months):
        keys.append(f"{year:04d}-{month:02d}")
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return list(reversed(keys))


class StatsService:
    """Counts and recent activity for the admin dashboard."""

    def __init__(self, session: Session):
        self.session = session

    def _count(self, model, *conditions) -> int:
        return self.session.execute(
            select(func.count(model.id)).where(*conditions)
        ).scalar_one()

    def dashboard(self, now: Optional[datetime] = None) -> dict:
        now = now or datetime.now(timezone.utc)

        stats = {
            "total_packages": self._count(Package, Package.status == PackageStatus.ACTIVE),
            "total_destinations": self._count(
                Destination, Destination.status == DestinationStatus.ACTIVE
            ),
            "total_enquiries": self._count(PackageEnquiry),
            "total_blog_posts": self._count(BlogPost, BlogPost.published.is_(True)),
            "new_enquiries": self._count(PackageEnquiry, PackageEnquiry.status == EnquiryStatus.NEW),
            "pending_reviews": self._count(Review, Review.status == ReviewStatus.PENDING),
            "pending_testimonials": self._count(
                Testimonial, Testimonial.status == TestimonialStatus.PENDING
            ),
        }

        recent = self.session.execute(
            select(PackageEnquiry)
            .options(selectinload(PackageEnquiry.package))
            .order_by(PackageEnquiry.created_at.desc())
            .limit(RECENT_ENQUIRIES)
        ).scalars().all()

        return {
            "stats": stats,
            "recent_enquiries": list(recent),
            "monthly_enquiries": self.monthly_enquiries(now),
        }

    def monthly_enquiries(self, now: datetime) -> List[Dict[str, object]]:
        """Enquiry counts per calendar month, zero-filled, oldest first."""
        keys = month_keys(now)
        first_year, first_month = (int(part) for part in keys[0].split("-"))
        since = datetime(first_year, first_month, 1, tzinfo=timezone.utc)

        buckets = dict.fromkeys(keys, 0)
        created = self.session.execute(
            select(PackageEnquiry.created_at).where(PackageEnquiry.created_at >= since)
        ).scalars()
        for created_at in created:
            key = created_at.strftime("%Y-%m")
            if key in buckets:
                buckets[key] += 1

        return [{"month": key, "count": count} for key, count in buckets.items()]
