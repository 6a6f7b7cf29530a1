"""
Laundry API Backend: Credential Service
=========================================

What:  Password hashing/verification and session token issuance/verification.
Why:   Every protected route trusts the identity and role inside a token,
       so tokens must be tamper-evident and time-limited, and passwords
       must never be stored in a reversible form.
How:   bcrypt (random salt per hash, fixed work factor) for passwords;
       PyJWT with HS256 for tokens carrying id, role, iat and exp.
Who:   auth_service (register/login), user_service (profile updates,
       owner seeding), access.py (token verification on every request).

Threading note:
    bcrypt is deliberately slow and holds the CPU. Async callers go through
    hash_password_async() / verify_password_async(), which run the work in
    Starlette's threadpool so the event loop keeps serving other requests.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt
from starlette.concurrency import run_in_threadpool

from laundryapi.config import settings
from laundryapi.exceptions import ExpiredTokenError, InvalidTokenError, ValidationError
from laundryapi.models.user import Role

logger = logging.getLogger(__name__)

TOKEN_ALGORITHM = "HS256"

# bcrypt only looks at the first 72 bytes; longer inputs are rejected
# rather than silently truncated
MAX_PASSWORD_BYTES = 72


@dataclass(frozen=True)
class TokenClaims:
    """Identity and role carried by a verified session token."""

    id: int
    role: Role


# ── Passwords ─────────────────────────────────────────────────────────────

def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """
    Hash a password with bcrypt.

    Args:
        password: Plaintext password (at most 72 bytes once UTF-8 encoded)
        rounds:   Work factor override; defaults to PASSWORD_HASH_ROUNDS

    Returns:
        The 60-character bcrypt hash as text, ready for the users table.

    Raises:
        ValidationError: Empty or over-long password.
    """
    encoded = password.encode("utf-8")
    if not encoded:
        raise ValidationError(message="Invalid request body", field="password")
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise ValidationError(
            message=f"Password must be at most {MAX_PASSWORD_BYTES} bytes",
            field="password",
        )
    salt = bcrypt.gensalt(rounds=rounds or settings.password_hash_rounds)
    return bcrypt.hashpw(encoded, salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """
    Check a plaintext password against a stored bcrypt hash.

    Never raises: a malformed hash or an over-long password simply does not
    match. bcrypt.checkpw compares in constant time.
    """
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except (ValueError, TypeError):
        return False


async def hash_password_async(password: str) -> str:
    return await run_in_threadpool(hash_password, password)


async def verify_password_async(password: str, password_hash: str) -> bool:
    return await run_in_threadpool(verify_password, password, password_hash)


# ── Session Tokens ────────────────────────────────────────────────────────

def issue_token(
    claims: TokenClaims,
    secret: Optional[str] = None,
    ttl_seconds: Optional[int] = None,
) -> str:
    """
    Sign a session token for the given identity.

    Payload: {"id": <user id>, "role": <role>, "iat": <now>, "exp": <now + ttl>}

    The secret comes from process configuration (JWT_SECRET) unless passed
    explicitly; it is never derived from stored data.
    """
    now = datetime.now(timezone.utc)
    ttl = ttl_seconds if ttl_seconds is not None else settings.token_ttl_seconds
    payload = {
        "id": claims.id,
        "role": claims.role.value,
        "iat": now,
        "exp": now + timedelta(seconds=ttl),
    }
    return jwt.encode(payload, secret or settings.jwt_secret, algorithm=TOKEN_ALGORITHM)


def verify_token(token: str, secret: Optional[str] = None) -> TokenClaims:
    """
    Verify a session token and return its claims.

    Raises:
        ExpiredTokenError: Signature valid but exp is in the past.
        InvalidTokenError: Bad signature, malformed token, or claims that
                           are missing or not a known id/role.
    """
    try:
        payload = jwt.decode(
            token,
            secret or settings.jwt_secret,
            algorithms=[TOKEN_ALGORITHM],
            options={"require": ["exp", "iat"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise ExpiredTokenError(context={"reason": str(e)}) from e
    except jwt.InvalidTokenError as e:
        raise InvalidTokenError(context={"reason": str(e)}) from e

    try:
        user_id = payload["id"]
        role = Role(payload["role"])
    except (KeyError, ValueError) as e:
        raise InvalidTokenError(context={"reason": "missing or unknown claims"}) from e
    if not isinstance(user_id, int) or isinstance(user_id, bool):
        raise InvalidTokenError(context={"reason": "id claim is not an integer"})

    return TokenClaims(id=user_id, role=role)
