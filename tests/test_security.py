import pytest
from datetime import timedelta
from jose import jwt

from doctors_portal.core.security import (
    InvalidTokenError, TokenError, TokenExpiredError,
    create_access_token, decode_token, verify_token
)
from tests.conftest import make_settings

settings = make_settings()


class TestTokenService:

    def test_verify_returns_embedded_email(self):
        """A freshly issued token verifies to the same email."""
        token = create_access_token("a@x.com", settings=settings)
        assert verify_token(token, settings) == "a@x.com"

    def test_token_expires_one_day_after_issue(self):
        """Default expiry is 24 hours after issuance."""
        token = create_access_token("a@x.com", settings=settings)
        payload = decode_token(token, settings)
        assert payload.exp - payload.iat == 24 * 60 * 60

    def test_expired_token(self):
        """An expired token raises TokenExpiredError."""
        token = create_access_token(
            "a@x.com", expires_delta=timedelta(minutes=-5), settings=settings
        )
        with pytest.raises(TokenExpiredError):
            verify_token(token, settings)

    def test_wrong_secret(self):
        """A token signed with another secret is rejected."""
        other = make_settings(ACCESS_TOKEN_SECRET="another-secret")
        token = create_access_token("a@x.com", settings=other)
        with pytest.raises(InvalidTokenError):
            verify_token(token, settings)

    def test_malformed_token(self):
        """Garbage is rejected as invalid."""
        with pytest.raises(InvalidTokenError):
            verify_token("not-a-token", settings)

    def test_token_without_email_claim(self):
        """A correctly signed token must still carry an email."""
        token = jwt.encode({"sub": "someone"}, settings.ACCESS_TOKEN_SECRET, algorithm="HS256")
        with pytest.raises(InvalidTokenError):
            verify_token(token, settings)

    def test_errors_share_base_class(self):
        assert issubclass(TokenExpiredError, TokenError)
        assert issubclass(InvalidTokenError, TokenError)
