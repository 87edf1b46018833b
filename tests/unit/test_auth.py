"""
Unit tests for access token handling.
"""

from unittest.mock import patch

import pytest
from fastapi_users.jwt import generate_jwt

from medicamp.auth import (
    TOKEN_AUDIENCE,
    cookie_options,
    create_access_token,
    decode_access_token,
    get_token_secret,
)
from medicamp.exceptions import AuthenticationError


@pytest.mark.unit
class TestAccessTokens:
    def test_round_trip_keeps_identity(self):
        token = create_access_token(
            "pat@example.com", name="Pat", picture="https://example.com/pat.png"
        )

        claims = decode_access_token(token)

        assert claims.email == "pat@example.com"
        assert claims.name == "Pat"
        assert claims.picture == "https://example.com/pat.png"

    def test_expired_token_is_rejected(self):
        token = generate_jwt(
            {"email": "pat@example.com", "aud": TOKEN_AUDIENCE},
            get_token_secret(),
            lifetime_seconds=-10,
        )

        with pytest.raises(AuthenticationError) as exc_info:
            decode_access_token(token)
        assert exc_info.value.status_code == 401

    def test_token_signed_with_other_secret_is_rejected(self):
        token = generate_jwt(
            {"email": "pat@example.com", "aud": TOKEN_AUDIENCE},
            "another-secret-key-that-is-long-enough-to-sign",
            lifetime_seconds=60,
        )

        with pytest.raises(AuthenticationError):
            decode_access_token(token)

    def test_token_for_other_audience_is_rejected(self):
        token = generate_jwt(
            {"email": "pat@example.com", "aud": ["someone-else"]},
            get_token_secret(),
            lifetime_seconds=60,
        )

        with pytest.raises(AuthenticationError):
            decode_access_token(token)

    def test_token_without_email_is_rejected(self):
        token = generate_jwt(
            {"name": "Nobody", "aud": TOKEN_AUDIENCE},
            get_token_secret(),
            lifetime_seconds=60,
        )

        with pytest.raises(AuthenticationError):
            decode_access_token(token)

    def test_garbage_is_rejected(self):
        with pytest.raises(AuthenticationError):
            decode_access_token("not-a-jwt")


@pytest.mark.unit
class TestCookieOptions:
    def test_development_cookie_is_strict(self):
        with patch("medicamp.auth.settings", {"ENVIRONMENT": "development"}):
            options = cookie_options()

        assert options == {"httponly": True, "secure": False, "samesite": "strict"}

    def test_production_cookie_is_cross_site_and_secure(self):
        with patch("medicamp.auth.settings", {"ENVIRONMENT": "production"}):
            options = cookie_options()

        assert options == {"httponly": True, "secure": True, "samesite": "none"}
