"""
Contract tests for catalogue, enquiry and dashboard endpoints.

Validates API schema compliance: camelCase keys and status codes.
"""
from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from travel_cms.api.app import app
from travel_cms.api.dependencies import require_admin
from travel_cms.models import User, UserRole


@pytest.fixture
def admin_client():
    user = MagicMock(spec=User)
    user.id = uuid4()
    user.name = "Contract Admin"
    user.role = UserRole.ADMIN
    app.dependency_overrides[require_admin] = lambda: user

    yield TestClient(app)

    app.dependency_overrides.clear()


class TestPackageContract:
    """Contract tests for /packages"""

    @pytest.mark.contract
    def test_package_keys_are_camel_case(self, client, make_package):
        make_package(original_price=18000, group_size="2-10", best_time="Nov-Feb")

        package = client.get("/packages").json()[0]

        for key in ("destinationId", "destinationName", "originalPrice", "groupSize",
                    "bestTime", "createdAt", "updatedAt"):
            assert key in package
        assert "destination_name" not in package

    @pytest.mark.contract
    def test_create_returns_201(self, admin_client):
        response = admin_client.post("/packages", json={"name": "Kutch Festival", "price": 22000})

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["slug"] == "kutch-festival"

    @pytest.mark.contract
    def test_create_accepts_camel_case_input(self, admin_client):
        response = admin_client.post(
            "/packages",
            json={"name": "Kutch Festival", "price": 22000, "originalPrice": 25000, "groupSize": "4-12"},
        )

        assert response.json()["originalPrice"] == 25000
        assert response.json()["groupSize"] == "4-12"

    @pytest.mark.contract
    def test_invalid_enum_is_client_error(self, admin_client):
        response = admin_client.post(
            "/packages", json={"name": "Kutch", "price": 1, "difficulty": "EXTREME"}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestEnquiryContract:
    """Contract tests for /packages/enquiry and /contact"""

    @pytest.mark.contract
    def test_enquiry_schema(self, client):
        response = client.post(
            "/packages/enquiry",
            json={"name": "Neha", "email": "neha@example.com", "phone": "1"},
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert set(response.json()) == {
            "id", "name", "email", "phone", "packageId", "packageName", "travelDate",
            "travelTime", "adults", "children", "rooms", "message", "status",
            "createdAt", "package",
        }

    @pytest.mark.contract
    def test_contact_schema(self, client):
        response = client.post(
            "/contact",
            json={"name": "Priya", "email": "priya@example.com", "message": "Hello"},
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert set(response.json()) == {"success", "message", "id"}


class TestDashboardContract:
    """Contract tests for /admin"""

    @pytest.mark.contract
    def test_stats_schema(self, admin_client):
        response = admin_client.get("/admin/stats")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert set(data) == {"stats", "recentEnquiries", "monthlyEnquiries"}
        assert set(data["stats"]) == {
            "totalPackages", "totalDestinations", "totalEnquiries", "totalBlogPosts",
            "newEnquiries", "pendingReviews", "pendingTestimonials",
        }
        assert set(data["monthlyEnquiries"][0]) == {"month", "count"}

    @pytest.mark.contract
    def test_admin_search_short_query(self, admin_client):
        response = admin_client.get("/admin/search", params={"q": "a"})

        assert response.json() == {"results": []}
