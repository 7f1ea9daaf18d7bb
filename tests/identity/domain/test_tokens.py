"""Tests for access tokens and password hashing."""

from datetime import UTC, datetime, timedelta

import jwt

from storefront.config import get_settings
from storefront.identity.passwords import hash_password, verify_password
from storefront.identity.tokens import (
    JWT_ALGORITHM,
    create_access_token,
    create_refresh_token,
    decode_access_token,
    decode_refresh_token,
)


class TestAccessTokens:
    def test_round_trip_carries_principal(self):
        token = create_access_token(user_id="user-1", email="a@example.com", role="ADMIN")
        principal = decode_access_token(token)
        assert principal.user_id == "user-1"
        assert principal.email == "a@example.com"
        assert principal.is_admin is True

    def test_shopper_is_not_admin(self):
        principal = decode_access_token(create_access_token("user-2", "b@example.com", "USER"))
        assert principal.is_admin is False

    def test_tampered_token_is_rejected(self):
        token = create_access_token("user-1", "a@example.com", "USER")
        assert decode_access_token(token[:-2] + "xx") is None

    def test_token_signed_with_other_secret_is_rejected(self):
        token = jwt.encode({"sub": "user-1", "role": "ADMIN"}, "another-secret", algorithm=JWT_ALGORITHM)
        assert decode_access_token(token) is None

    def test_expired_token_is_rejected(self):
        past = datetime.now(UTC) - timedelta(hours=1)
        token = jwt.encode(
            {"sub": "user-1", "email": "a@example.com", "role": "USER", "exp": int(past.timestamp())},
            get_settings().jwt_secret,
            algorithm=JWT_ALGORITHM,
        )
        assert decode_access_token(token) is None

    def test_garbage_is_rejected(self):
        assert decode_access_token("not-a-jwt") is None


class TestPasswordHashing:
    def test_hash_is_salted(self):
        assert hash_password("password123") != hash_password("password123")

    def test_verify(self):
        hashed = hash_password("password123")
        assert verify_password("password123", hashed) is True
        assert verify_password("password124", hashed) is False

    def test_unknown_format_never_verifies(self):
        assert verify_password("password123", "$2b$10$somebcrypthash") is False
        assert verify_password("password123", None) is False


class TestRefreshTokens:
    def test_refresh_token_round_trip(self):
        principal = decode_refresh_token(create_refresh_token("user-1", "a@example.com", "USER"))
        assert principal.user_id == "user-1"

    def test_kinds_are_not_interchangeable(self):
        access = create_access_token("user-1", "a@example.com", "USER")
        refresh = create_refresh_token("user-1", "a@example.com", "USER")
        assert decode_refresh_token(access) is None
        assert decode_access_token(refresh) is None

    def test_token_without_type_claim_is_an_access_token(self):
        token = jwt.encode(
            {"sub": "user-1", "email": "a@example.com", "role": "USER"},
            get_settings().jwt_secret,
            algorithm=JWT_ALGORITHM,
        )
        assert decode_access_token(token).user_id == "user-1"
        assert decode_refresh_token(token) is None
