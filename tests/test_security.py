"""
Tests for password hashing and JWT helpers.
"""

from datetime import timedelta

from fornecedor_api.core.config import Settings
from fornecedor_api.core.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)


class TestPasswordHashing:
    """Tests for bcrypt helpers."""

    def test_hash_and_verify(self):
        hashed = get_password_hash("Senha@123")

        assert hashed != "Senha@123"
        assert verify_password("Senha@123", hashed) is True
        assert verify_password("Outra@123", hashed) is False

    def test_hashes_are_salted(self):
        assert get_password_hash("Senha@123") != get_password_hash("Senha@123")

    def test_verify_over_byte_limit_is_false(self):
        """Test a password bcrypt cannot hash never matches instead of raising."""
        hashed = get_password_hash("Senha@123")

        assert verify_password("Senha@123" + "x" * 80, hashed) is False


class TestAccessToken:
    """Tests for token encode/decode."""

    def test_roundtrip_registered_claims(self):
        settings = Settings(SECRET_KEY="k1")
        token = create_access_token({"sub": "abc", "email": "a@b.com"}, settings=settings)

        payload = decode_access_token(token, settings)

        assert payload["sub"] == "abc"
        assert payload["iss"] == settings.JWT_ISSUER
        assert payload["aud"] == settings.JWT_AUDIENCE
        assert payload["exp"] - payload["iat"] == settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60

    def test_expired_token(self):
        settings = Settings(SECRET_KEY="k1")
        token = create_access_token({"sub": "abc"}, expires_delta=timedelta(minutes=-5), settings=settings)

        assert decode_access_token(token, settings) is None

    def test_wrong_secret(self):
        token = create_access_token({"sub": "abc"}, settings=Settings(SECRET_KEY="k1"))

        assert decode_access_token(token, Settings(SECRET_KEY="k2")) is None

    def test_wrong_audience(self):
        token = create_access_token({"sub": "abc"}, settings=Settings(SECRET_KEY="k1", JWT_AUDIENCE="outro"))

        assert decode_access_token(token, Settings(SECRET_KEY="k1")) is None

    def test_garbage(self):
        assert decode_access_token("not-a-token") is None
