"""Tests for JWT utilities."""
from datetime import timedelta
from uuid import UUID

import jwt
import pytest
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError

from travel_cms.lib.jwt import create_access_token, token_subject, verify_token
from travel_cms.lib.settings import settings


ADMIN_ID = "123e4567-e89b-12d3-a456-426614174000"


@pytest.mark.unit
def test_create_and_verify_token():
    token = create_access_token(ADMIN_ID, "ADMIN")

    payload = verify_token(token)
    assert payload["sub"] == ADMIN_ID
    assert payload["role"] == "ADMIN"
    assert "iat" in payload
    assert "exp" in payload


@pytest.mark.unit
def test_token_subject():
    token = create_access_token(ADMIN_ID, "EDITOR")

    assert token_subject(token) == UUID(ADMIN_ID)


@pytest.mark.unit
def test_token_subject_must_be_uuid():
    token = create_access_token("admin@example.com", "ADMIN")

    with pytest.raises(InvalidTokenError):
        token_subject(token)


@pytest.mark.unit
def test_expired_token():
    """A token whose expiry is already in the past is rejected."""
    token = create_access_token(ADMIN_ID, "ADMIN", expires_delta=timedelta(seconds=-10))

    with pytest.raises(ExpiredSignatureError):
        verify_token(token)


@pytest.mark.unit
def test_token_without_expiry_rejected():
    token = jwt.encode({"sub": ADMIN_ID, "role": "ADMIN"}, settings.jwt_secret, algorithm="HS256")

    with pytest.raises(InvalidTokenError):
        verify_token(token)


@pytest.mark.unit
def test_invalid_token():
    with pytest.raises(InvalidTokenError):
        verify_token("not.a.token")


@pytest.mark.unit
def test_token_signed_with_other_secret():
    forged = jwt.encode(
        {"sub": ADMIN_ID, "role": "ADMIN", "exp": 4102444800},
        "another-secret-that-is-long-enough-for-hs256",
        algorithm="HS256",
    )

    with pytest.raises(InvalidTokenError):
        verify_token(forged)
