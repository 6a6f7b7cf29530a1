"""
Laundry API Backend: Credential Service Unit Tests
====================================================

What we test:
    ✅ bcrypt hashes verify and never equal the plaintext
    ✅ Over-long and empty passwords are rejected before hashing
    ✅ Tokens round-trip id and role
    ✅ Expired, tampered and malformed tokens are rejected
"""

import jwt
import pytest

from laundryapi.exceptions import ExpiredTokenError, InvalidTokenError, ValidationError
from laundryapi.models.user import Role
from laundryapi.security.credentials import (
    MAX_PASSWORD_BYTES,
    TOKEN_ALGORITHM,
    TokenClaims,
    hash_password,
    hash_password_async,
    issue_token,
    verify_password,
    verify_password_async,
    verify_token,
)


class TestPasswordHashing:

    def test_hash_verifies_and_differs_from_plaintext(self):
        hashed = hash_password("p1", rounds=4)
        assert hashed != "p1"
        assert verify_password("p1", hashed)

    def test_wrong_password_does_not_verify(self):
        hashed = hash_password("p1", rounds=4)
        assert not verify_password("p2", hashed)

    def test_same_password_gets_a_fresh_salt(self):
        assert hash_password("p1", rounds=4) != hash_password("p1", rounds=4)

    def test_malformed_hash_does_not_verify(self):
        assert verify_password("p1", "not-a-bcrypt-hash") is False

    def test_empty_password_rejected(self):
        with pytest.raises(ValidationError):
            hash_password("")

    def test_overlong_password_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            hash_password("x" * (MAX_PASSWORD_BYTES + 1))
        assert exc_info.value.field == "password"

    @pytest.mark.asyncio
    async def test_async_wrappers(self):
        hashed = await hash_password_async("p1")
        assert await verify_password_async("p1", hashed)
        assert not await verify_password_async("nope", hashed)


class TestSessionTokens:

    def test_round_trip(self):
        token = issue_token(TokenClaims(id=7, role=Role.ADMIN))
        assert verify_token(token) == TokenClaims(id=7, role=Role.ADMIN)

    def test_payload_carries_expiry(self):
        token = issue_token(TokenClaims(id=7, role=Role.USER), secret="s", ttl_seconds=60)
        payload = jwt.decode(token, "s", algorithms=[TOKEN_ALGORITHM])
        assert payload["id"] == 7
        assert payload["role"] == "user"
        assert payload["exp"] - payload["iat"] == 60

    def test_expired_token(self):
        token = issue_token(TokenClaims(id=1, role=Role.OWNER), ttl_seconds=-10)
        with pytest.raises(ExpiredTokenError):
            verify_token(token)

    def test_expired_is_a_kind_of_invalid(self):
        assert issubclass(ExpiredTokenError, InvalidTokenError)

    def test_wrong_secret(self):
        token = issue_token(TokenClaims(id=1, role=Role.OWNER), secret="one")
        with pytest.raises(InvalidTokenError):
            verify_token(token, secret="two")

    def test_garbage_token(self):
        with pytest.raises(InvalidTokenError):
            verify_token("not.a.token")

    def test_unknown_role_claim(self):
        token = jwt.encode(
            {"id": 1, "role": "superuser", "iat": 0, "exp": 4102444800},
            "s",
            algorithm=TOKEN_ALGORITHM,
        )
        with pytest.raises(InvalidTokenError):
            verify_token(token, secret="s")

    def test_non_integer_id_claim(self):
        token = jwt.encode(
            {"id": "1", "role": "owner", "iat": 0, "exp": 4102444800},
            "s",
            algorithm=TOKEN_ALGORITHM,
        )
        with pytest.raises(InvalidTokenError):
            verify_token(token, secret="s")

    def test_missing_exp_claim(self):
        token = jwt.encode({"id": 1, "role": "owner", "iat": 0}, "s", algorithm=TOKEN_ALGORITHM)
        with pytest.raises(InvalidTokenError):
            verify_token(token, secret="s")
