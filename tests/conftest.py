"""
Shared pytest fixtures.

Every test runs against a fresh in-memory SQLite schema; the environment is
set before any travel_cms module reads its settings.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret-key-with-enough-length-for-hs256"
os.environ["REVALIDATE_URL"] = ""
os.environ["LOG_JSON"] = "false"

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from travel_cms.api.app import app
from travel_cms.lib.db import Base, SessionLocal, engine
from travel_cms.lib.events import get_event_bus
from travel_cms.lib.jwt import create_access_token
from travel_cms.lib.metrics import reset_metrics
from travel_cms.models import (
    Destination,
    Package,
    PackageStatus,
    Review,
    ReviewStatus,
    User,
    UserRole,
)


@pytest.fixture(autouse=True)
def database():
    """Create the schema for one test and drop it afterwards."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def clean_globals():
    """Reset process-wide counters and subscribers between tests."""
    reset_metrics()
    get_event_bus().clear()
    yield
    reset_metrics()
    get_event_bus().clear()


@pytest.fixture
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    """Test client for FastAPI app."""
    return TestClient(app)


@pytest.fixture
def published_events():
    """Collect every event published on the global bus."""
    events = []
    get_event_bus().subscribe(events.append)
    return events


def _user(db_session, role: UserRole, email: str) -> User:
    user = User(id=uuid4(), email=email, name=f"{role.value.title()} User", role=role)
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture
def admin_user(db_session):
    return _user(db_session, UserRole.ADMIN, "admin@example.com")


@pytest.fixture
def editor_user(db_session):
    return _user(db_session, UserRole.EDITOR, "editor@example.com")


@pytest.fixture
def admin_headers(admin_user):
    token = create_access_token(str(admin_user.id), admin_user.role.value)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def editor_headers(editor_user):
    token = create_access_token(str(editor_user.id), editor_user.role.value)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_destination(db_session):
    def factory(**overrides) -> Destination:
        name = overrides.pop("name", "Manali")
        fields = {
            "name": name,
            "slug": overrides.pop("slug", name.lower().replace(" ", "-")),
            "location": "Himachal Pradesh",
            "country": "India",
        }
        fields.update(overrides)
        destination = Destination(**fields)
        db_session.add(destination)
        db_session.commit()
        return destination

    return factory


@pytest.fixture
def make_package(db_session):
    def factory(**overrides) -> Package:
        name = overrides.pop("name", "Goa Beach Escape")
        fields = {
            "name": name,
            "slug": overrides.pop("slug", name.lower().replace(" ", "-")),
            "destination_name": "Goa",
            "location": "North Goa",
            "country": "India",
            "price": 15000,
            "duration": "4 Days / 3 Nights",
            "status": PackageStatus.ACTIVE,
        }
        fields.update(overrides)
        package = Package(**fields)
        db_session.add(package)
        db_session.commit()
        return package

    return factory


@pytest.fixture
def make_review(db_session):
    def factory(package: Package, rating: int = 5, status: ReviewStatus = ReviewStatus.PENDING, **overrides) -> Review:
        fields = {
            "package_id": package.id,
            "name": "Asha",
            "comment": "Lovely trip",
            "rating": rating,
            "status": status,
        }
        fields.update(overrides)
        review = Review(**fields)
        db_session.add(review)
        db_session.commit()
        return review

    return factory
