"""
Integration tests for the site settings routes.
"""
import pytest

from travel_cms.lib.events import ContentChanged
from travel_cms.models import SiteSettings


@pytest.mark.integration
def test_get_settings_creates_defaults(client, db_session):
    response = client.get("/settings")

    assert response.status_code == 200
    data = response.json()
    assert data["companyName"] == "Thapa Holidays"
    assert data["supportEmail"] == "thapa.holidays09@gmail.com"
    assert {"id", "createdAt", "updatedAt", "whatsapp", "youtube"} <= set(data)
    assert client.get("/settings").json()["id"] == data["id"]
    assert db_session.query(SiteSettings).count() == 1


@pytest.mark.integration
def test_admin_updates_settings(client, admin_headers, published_events):
    client.get("/settings")

    response = client.put(
        "/settings",
        json={"companyName": "Thapa Tours", "phone2": None},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert response.json()["companyName"] == "Thapa Tours"
    assert response.json()["phone2"] is None
    assert client.get("/settings").json()["companyName"] == "Thapa Tours"
    assert ContentChanged(paths=("/",)) in published_events


@pytest.mark.integration
def test_update_settings_requires_admin(client, editor_headers):
    client.get("/settings")

    assert client.put("/settings", json={"tagline": "x"}).status_code == 401
    response = client.put("/settings", json={"tagline": "x"}, headers=editor_headers)

    assert response.status_code == 401
    assert client.get("/settings").json()["tagline"] == "Discover Amazing Places"


@pytest.mark.integration
def test_update_settings_rejects_blank_company_name(client, admin_headers):
    response = client.put("/settings", json={"companyName": " "}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["error"] == "Company name is required"
