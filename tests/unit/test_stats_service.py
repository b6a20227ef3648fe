"""
Tests for admin dashboard statistics.
"""
from datetime import datetime, timezone

import pytest

from travel_cms.models import (
    BlogPost,
    EnquiryStatus,
    PackageEnquiry,
    PackageStatus,
    ReviewStatus,
    Testimonial,
)
from travel_cms.services.stats_service import StatsService, month_keys


NOW = datetime(2026, 3, 15, tzinfo=timezone.utc)


@pytest.mark.unit
def test_month_keys_cross_year_boundary():
    assert month_keys(NOW) == [
        "2025-10", "2025-11", "2025-12", "2026-01", "2026-02", "2026-03",
    ]


@pytest.mark.unit
def test_dashboard_counts(db_session, make_package, make_review):
    package = make_package()
    make_package(name="Hidden", status=PackageStatus.INACTIVE)
    make_review(package, status=ReviewStatus.PENDING)
    make_review(package, status=ReviewStatus.APPROVED)
    db_session.add_all([
        BlogPost(title="Live", slug="live", published=True),
        BlogPost(title="Draft", slug="draft"),
        Testimonial(name="Karan", comment="Superb", rating=5),
        PackageEnquiry(name="A", email="a@example.com", phone="1"),
        PackageEnquiry(name="B", email="b@example.com", phone="2", status=EnquiryStatus.CONTACTED),
    ])
    db_session.commit()

    stats = StatsService(db_session).dashboard(now=NOW)["stats"]

    assert stats == {
        "total_packages": 1,
        "total_destinations": 0,
        "total_enquiries": 2,
        "total_blog_posts": 1,
        "new_enquiries": 1,
        "pending_reviews": 1,
        "pending_testimonials": 1,
    }


@pytest.mark.unit
def test_recent_enquiries_capped_newest_first(db_session):
    for day in range(1, 8):
        db_session.add(PackageEnquiry(
            name=f"Guest {day}",
            email=f"g{day}@example.com",
            phone="1",
            created_at=datetime(2026, 3, day, tzinfo=timezone.utc),
        ))
    db_session.commit()

    recent = StatsService(db_session).dashboard(now=NOW)["recent_enquiries"]

    assert [e.name for e in recent] == ["Guest 7", "Guest 6", "Guest 5", "Guest 4", "Guest 3"]


@pytest.mark.unit
def test_monthly_enquiries_zero_filled(db_session):
    for created in [
        datetime(2025, 8, 30, tzinfo=timezone.utc),
        datetime(2025, 11, 2, tzinfo=timezone.utc),
        datetime(2026, 3, 1, tzinfo=timezone.utc),
        datetime(2026, 3, 10, tzinfo=timezone.utc),
    ]:
        db_session.add(PackageEnquiry(name="G", email="g@example.com", phone="1", created_at=created))
    db_session.commit()

    monthly = StatsService(db_session).monthly_enquiries(NOW)

    assert monthly == [
        {"month": "2025-10", "count": 0},
        {"month": "2025-11", "count": 1},
        {"month": "2025-12", "count": 0},
        {"month": "2026-01", "count": 0},
        {"month": "2026-02", "count": 0},
        {"month": "2026-03", "count": 2},
    ]
