"""
Tests for the review workflow service.
"""
from unittest.mock import patch
from uuid import uuid4

import pytest

from travel_cms.api.middleware.error_handler import NotFoundException, ValidationException
from travel_cms.lib.events import EventBus, PackageChanged
from travel_cms.lib.metrics import get_metrics_collector
from travel_cms.models import Package, PackageStatus, Review, ReviewStatus
from travel_cms.services.rating_service import RatingAggregator
from travel_cms.services.review_service import ReviewService, parse_review_status


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def events(bus):
    received = []
    bus.subscribe(received.append)
    return received


@pytest.fixture
def service(db_session, bus):
    return ReviewService(db_session, event_bus=bus)


@pytest.mark.unit
@pytest.mark.parametrize("value", ["approved", "APPROVED", ReviewStatus.APPROVED])
def test_parse_review_status_accepts_any_case(value):
    assert parse_review_status(value) == ReviewStatus.APPROVED


@pytest.mark.unit
@pytest.mark.parametrize("value", ["PUBLISHED", "", None])
def test_parse_review_status_rejects_unknown(value):
    with pytest.raises(ValidationException) as exc_info:
        parse_review_status(value)

    assert exc_info.value.message == "Invalid status"


@pytest.mark.unit
def test_submit_review_starts_pending(service, events, make_package):
    package = make_package()

    review = service.submit_review(package.id, "Ravi", "Great stay", 5, title="Wow")

    assert review.status == ReviewStatus.PENDING
    assert review.helpful == 0
    assert review.verified is False
    assert review.images == []
    assert events == [
        PackageChanged(package_id=package.id, slug=package.slug, rating=0.0, reviews=0)
    ]
    assert get_metrics_collector().get_counter_value("reviews_submitted_total") == 1


@pytest.mark.unit
@pytest.mark.parametrize("rating", [0, 6, None, True])
def test_submit_review_rejects_bad_rating(service, db_session, make_package, rating):
    package = make_package()

    with pytest.raises(ValidationException) as exc_info:
        service.submit_review(package.id, "Ravi", "Great stay", rating)

    assert exc_info.value.message == "Rating must be between 1 and 5"
    assert db_session.query(Review).count() == 0


@pytest.mark.unit
@pytest.mark.parametrize(
    "name, comment",
    [("", "Great"), ("Ravi", "   "), (None, "Great")],
)
def test_submit_review_requires_name_and_comment(service, make_package, name, comment):
    package = make_package()

    with pytest.raises(ValidationException) as exc_info:
        service.submit_review(package.id, name, comment, 4)

    assert exc_info.value.message == "Package ID, name, and comment are required"


@pytest.mark.unit
def test_submit_review_unknown_package(service, events):
    with pytest.raises(NotFoundException):
        service.submit_review(uuid4(), "Ravi", "Great stay", 4)

    assert events == []


@pytest.mark.unit
def test_submit_review_inactive_package(service, db_session, make_package):
    package = make_package(status=PackageStatus.DRAFT)

    with pytest.raises(NotFoundException):
        service.submit_review(package.id, "Ravi", "Great stay", 4)

    assert db_session.query(Review).count() == 0


@pytest.mark.unit
def test_approve_updates_aggregate(service, db_session, events, make_package, make_review):
    package = make_package()
    make_review(package, rating=4, status=ReviewStatus.APPROVED)
    review = make_review(package, rating=5)

    moderated = service.moderate_review(review.id, "APPROVED", verified=True)

    db_session.refresh(package)
    assert moderated.status == ReviewStatus.APPROVED
    assert moderated.verified is True
    assert package.rating == 4.5
    assert package.reviews == 2
    assert events[-1].package_id == package.id


@pytest.mark.unit
def test_moderation_without_verified_clears_flag(service, make_package, make_review):
    package = make_package()
    review = make_review(package, verified=True)

    moderated = service.moderate_review(review.id, "REJECTED")

    assert moderated.verified is False


@pytest.mark.unit
def test_unapprove_removes_from_aggregate(service, db_session, make_package, make_review):
    package = make_package()
    review = make_review(package, rating=2, status=ReviewStatus.APPROVED)
    make_review(package, rating=4, status=ReviewStatus.APPROVED)
    RatingAggregator(db_session).recompute(package.id)
    db_session.commit()

    service.moderate_review(review.id, "REJECTED")

    db_session.refresh(package)
    assert package.rating == 4.0
    assert package.reviews == 1


@pytest.mark.unit
def test_pending_to_rejected_skips_recompute(service, make_package, make_review):
    package = make_package()
    review = make_review(package)

    with patch.object(RatingAggregator, "recompute") as recompute:
        service.moderate_review(review.id, "REJECTED")

    recompute.assert_not_called()


@pytest.mark.unit
def test_recompute_failure_rolls_back_moderation(service, db_session, events, make_package, make_review):
    package = make_package()
    review = make_review(package, rating=5)

    with patch.object(RatingAggregator, "recompute", side_effect=RuntimeError("boom")):
        with pytest.raises(RuntimeError):
            service.moderate_review(review.id, "APPROVED")

    db_session.expire_all()
    assert db_session.get(Review, review.id).status == ReviewStatus.PENDING
    assert db_session.get(Package, package.id).reviews == 0
    assert events == []


@pytest.mark.unit
def test_moderate_unknown_review(service):
    with pytest.raises(NotFoundException):
        service.moderate_review(uuid4(), "APPROVED")


@pytest.mark.unit
def test_mark_helpful_increments_without_dedup(service, make_package, make_review):
    review = make_review(make_package())

    service.mark_helpful(review.id)
    updated = service.mark_helpful(review.id)

    assert updated.helpful == 2
    assert get_metrics_collector().get_counter_value("review_helpful_votes_total") == 2


@pytest.mark.unit
def test_mark_helpful_unknown_review(service):
    with pytest.raises(NotFoundException):
        service.mark_helpful(uuid4())


@pytest.mark.unit
def test_delete_approved_review_recomputes(service, db_session, make_package, make_review):
    package = make_package()
    review = make_review(package, rating=1, status=ReviewStatus.APPROVED)
    make_review(package, rating=5, status=ReviewStatus.APPROVED)

    service.delete_review(review.id)

    db_session.refresh(package)
    assert package.rating == 5.0
    assert package.reviews == 1
    assert db_session.get(Review, review.id) is None


@pytest.mark.unit
def test_list_reviews_public_requires_package(service):
    with pytest.raises(ValidationException) as exc_info:
        service.list_reviews()

    assert exc_info.value.message == "Package ID is required"


@pytest.mark.unit
def test_list_reviews_public_shows_only_approved(service, make_package, make_review):
    package = make_package()
    approved = make_review(package, status=ReviewStatus.APPROVED)
    make_review(package, status=ReviewStatus.PENDING)
    make_review(package, status=ReviewStatus.REJECTED)

    result = service.list_reviews(package_id=package.id)

    assert [r.id for r in result["reviews"]] == [approved.id]
    assert result["total"] == 1
    assert result["total_pages"] == 1


@pytest.mark.unit
def test_list_reviews_admin_filters_and_pages(service, make_package, make_review):
    package = make_package()
    other = make_package(name="Kerala Backwaters")
    for _ in range(3):
        make_review(package, status=ReviewStatus.PENDING)
    make_review(other, status=ReviewStatus.PENDING)
    make_review(other, status=ReviewStatus.APPROVED)

    result = service.list_reviews(status="pending", include_all=True, page=2, limit=3)

    assert result["total"] == 4
    assert result["total_pages"] == 2
    assert len(result["reviews"]) == 1


@pytest.mark.unit
@pytest.mark.parametrize("page, limit", [(0, 10), (1, 0), (1, 101)])
def test_list_reviews_rejects_bad_pagination(service, make_package, page, limit):
    with pytest.raises(ValidationException):
        service.list_reviews(package_id=make_package().id, page=page, limit=limit)
