"""
Integration tests for the review API: submission, moderation, aggregation,
helpful votes and admin-only access.
"""
from uuid import uuid4

import pytest

from travel_cms.lib.events import PackageChanged
from travel_cms.models import Package, PackageStatus, Review, ReviewStatus


def _submit(client, package, **overrides):
    body = {
        "packageId": str(package.id),
        "name": "Ravi",
        "email": "ravi@example.com",
        "rating": 5,
        "title": "Great",
        "comment": "Loved every day",
    }
    body.update(overrides)
    return client.post("/reviews", json=body)


@pytest.mark.integration
def test_submit_review_returns_pending(client, make_package, published_events):
    package = make_package()

    response = _submit(client, package, images=["https://img.example.com/1.jpg"])

    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Review submitted successfully and is pending approval"
    review = data["review"]
    assert review["status"] == "PENDING"
    assert review["packageId"] == str(package.id)
    assert review["helpful"] == 0
    assert review["verified"] is False
    assert review["images"] == ["https://img.example.com/1.jpg"]
    assert "createdAt" in review
    assert isinstance(published_events[-1], PackageChanged)


@pytest.mark.integration
@pytest.mark.parametrize("rating", [0, 6])
def test_submit_review_rating_out_of_range(client, db_session, make_package, rating):
    package = make_package()

    response = _submit(client, package, rating=rating)

    assert response.status_code == 400
    assert response.json()["error"] == "Rating must be between 1 and 5"
    assert db_session.query(Review).count() == 0


@pytest.mark.integration
def test_submit_review_missing_fields(client, make_package):
    response = _submit(client, make_package(), comment="")

    assert response.status_code == 400
    assert response.json()["error"] == "Package ID, name, and comment are required"


@pytest.mark.integration
def test_submit_review_fractional_rating_rejected(client, make_package):
    response = _submit(client, make_package(), rating=4.5)

    assert response.status_code == 400


@pytest.mark.integration
@pytest.mark.parametrize("package_status", [PackageStatus.INACTIVE, PackageStatus.DRAFT])
def test_submit_review_for_non_active_package(client, db_session, make_package, package_status):
    package = make_package(status=package_status)

    response = _submit(client, package)

    assert response.status_code == 404
    assert db_session.query(Review).count() == 0


@pytest.mark.integration
def test_submit_review_for_unknown_package(client, db_session):
    response = client.post(
        "/reviews",
        json={"packageId": str(uuid4()), "name": "Ravi", "rating": 4, "comment": "Hmm"},
    )

    assert response.status_code == 404
    assert response.json()["error"] == "Package not found"
    assert db_session.query(Review).count() == 0


@pytest.mark.integration
def test_round_trip_pending_visible_only_to_admin(client, make_package, admin_headers):
    package = make_package()
    review_id = _submit(client, package).json()["review"]["id"]

    admin_view = client.get(
        "/reviews",
        params={"packageId": str(package.id), "includeAll": "true"},
        headers=admin_headers,
    )
    public_view = client.get("/reviews", params={"packageId": str(package.id)})

    assert admin_view.status_code == 200
    listed = {r["id"]: r["status"] for r in admin_view.json()["reviews"]}
    assert listed == {review_id: "PENDING"}
    assert public_view.status_code == 200
    assert public_view.json() == {"reviews": [], "total": 0, "page": 1, "totalPages": 0}


@pytest.mark.integration
def test_include_all_requires_admin(client, make_package, editor_headers):
    package = make_package()
    params = {"packageId": str(package.id), "includeAll": "true"}

    assert client.get("/reviews", params=params).status_code == 401
    assert client.get("/reviews", params=params, headers=editor_headers).status_code == 401


@pytest.mark.integration
def test_public_list_hides_reviewer_email(client, make_package, make_review):
    package = make_package()
    make_review(package, status=ReviewStatus.APPROVED, email="secret@example.com")

    response = client.get("/reviews", params={"packageId": str(package.id)})

    assert response.status_code == 200
    [review] = response.json()["reviews"]
    assert "email" not in review
    assert "secret@example.com" not in response.text


@pytest.mark.integration
def test_public_list_requires_package_id(client):
    response = client.get("/reviews")

    assert response.status_code == 400
    assert response.json()["error"] == "Package ID is required"


@pytest.mark.integration
def test_approving_reviews_updates_package_aggregate(client, db_session, make_package, admin_headers):
    package = make_package()
    ids = [_submit(client, package, rating=r).json()["review"]["id"] for r in (3, 4, 4, 4, 5, 5)]

    for review_id in ids:
        response = client.put(
            "/reviews",
            json={"id": review_id, "status": "APPROVED", "verified": True},
            headers=admin_headers,
        )
        assert response.status_code == 200
        assert response.json()["review"]["status"] == "APPROVED"
        assert response.json()["review"]["verified"] is True

    db_session.expire_all()
    package = db_session.get(Package, package.id)
    assert package.rating == 4.2
    assert package.reviews == 6

    detail = client.get(f"/packages/{package.slug}").json()
    assert detail["rating"] == 4.2
    assert detail["reviews"] == 6


@pytest.mark.integration
def test_rejecting_approved_review_removes_it(client, db_session, make_package, admin_headers):
    package = make_package()
    low = _submit(client, package, rating=1).json()["review"]["id"]
    high = _submit(client, package, rating=5).json()["review"]["id"]
    for review_id in (low, high):
        client.put("/reviews", json={"id": review_id, "status": "APPROVED"}, headers=admin_headers)

    client.put("/reviews", json={"id": low, "status": "REJECTED"}, headers=admin_headers)

    db_session.expire_all()
    package = db_session.get(Package, package.id)
    assert (package.rating, package.reviews) == (5.0, 1)


@pytest.mark.integration
def test_moderation_invalid_status(client, make_package, make_review, admin_headers):
    review = make_review(make_package())

    response = client.put(
        "/reviews",
        json={"id": str(review.id), "status": "PUBLISHED"},
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid status"


@pytest.mark.integration
def test_moderation_unknown_review(client, admin_headers):
    response = client.put(
        "/reviews",
        json={"id": str(uuid4()), "status": "APPROVED"},
        headers=admin_headers,
    )

    assert response.status_code == 404


@pytest.mark.integration
def test_unauthorized_put_and_delete_do_not_mutate(
    client, db_session, make_package, make_review, editor_headers
):
    review = make_review(make_package())

    for headers in ({}, editor_headers, {"Authorization": "Bearer garbage"}):
        put = client.put(
            "/reviews",
            json={"id": str(review.id), "status": "APPROVED"},
            headers=headers,
        )
        delete = client.delete("/reviews", params={"id": str(review.id)}, headers=headers)
        assert put.status_code == 401
        assert delete.status_code == 401
        assert put.json()["error"]

    db_session.expire_all()
    stored = db_session.get(Review, review.id)
    assert stored is not None
    assert stored.status == ReviewStatus.PENDING


@pytest.mark.integration
def test_helpful_votes_accumulate(client, make_package, make_review):
    review = make_review(make_package(), helpful=3)

    first = client.patch("/reviews", json={"id": str(review.id), "action": "helpful"})
    second = client.patch("/reviews", json={"id": str(review.id), "action": "helpful"})

    assert first.status_code == 200
    assert first.json() == {"review": {"id": str(review.id), "helpful": 4}}
    assert second.json()["review"]["helpful"] == 5


@pytest.mark.integration
def test_helpful_vote_invalid_action(client, make_package, make_review):
    review = make_review(make_package())

    response = client.patch("/reviews", json={"id": str(review.id), "action": "unhelpful"})

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid action"


@pytest.mark.integration
def test_helpful_vote_unknown_review(client):
    response = client.patch("/reviews", json={"id": str(uuid4()), "action": "helpful"})

    assert response.status_code == 404


@pytest.mark.integration
def test_delete_review_recomputes_aggregate(client, db_session, make_package, make_review, admin_headers):
    package = make_package()
    doomed = make_review(package, rating=1, status=ReviewStatus.APPROVED)
    make_review(package, rating=4, status=ReviewStatus.APPROVED)

    response = client.delete("/reviews", params={"id": str(doomed.id)}, headers=admin_headers)

    assert response.status_code == 200
    assert response.json() == {"message": "Review deleted successfully"}
    db_session.expire_all()
    package = db_session.get(Package, package.id)
    assert (package.rating, package.reviews) == (4.0, 1)


@pytest.mark.integration
def test_delete_review_requires_id(client, admin_headers):
    response = client.delete("/reviews", headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["error"] == "Review ID is required"
