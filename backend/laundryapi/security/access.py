"""
Laundry API Backend: Access Control
=====================================

What:  FastAPI dependencies that authenticate the caller and gate routes
       by role.
Why:   Role checks live in one table instead of string comparisons spread
       across handlers.
How:   get_current_claims() extracts "Bearer <token>" from the Authorization
       header and verifies it. Role guards are built on top of it, either
       directly (require_role / require_any_of) or from the POLICY table
       via authorize(permission).

Per-request states:
    NoToken ──(header present)──▶ Verifying ──▶ Authenticated(claims)
       │                              │
       └─▶ 403 No token provided      └─▶ 401 Invalid token / Token expired

    Authenticated ──(role guard)──▶ handler
                         │
                         └─▶ 403 Require <role> role

Usage in a router:
    @router.post("/products", dependencies=[Depends(authorize(Permission.PRODUCTS_WRITE))])
    async def create_product(...): ...

    @router.get("/profile")
    async def profile(claims: TokenClaims = Depends(get_current_claims)): ...
"""

import enum
import logging
from typing import Callable, Dict, FrozenSet, Iterable, Optional

from fastapi import Depends, Header, Request

from laundryapi.exceptions import (
    ExpiredTokenError,
    ForbiddenError,
    InvalidTokenError,
    MissingTokenError,
)
from laundryapi.models.user import Role
from laundryapi.security.credentials import TokenClaims, verify_token

logger = logging.getLogger(__name__)

BEARER_SCHEME = "bearer"


class Permission(str, enum.Enum):
    """Named capabilities a route can require."""

    AUTHENTICATED = "authenticated"
    USERS_MANAGE = "users:manage"
    USERS_ASSIGN_ROLE = "users:assign_role"
    PRODUCTS_READ = "products:read"
    PRODUCTS_WRITE = "products:write"
    CUSTOMERS_MANAGE = "customers:manage"
    TRANSACTIONS_MANAGE = "transactions:manage"


_STAFF: FrozenSet[Role] = frozenset({Role.ADMIN, Role.OWNER})
_EVERYONE: FrozenSet[Role] = frozenset(Role)

# Centralized policy table: permission → roles allowed through
POLICY: Dict[Permission, FrozenSet[Role]] = {
    Permission.AUTHENTICATED: _EVERYONE,
    Permission.USERS_MANAGE: _STAFF,
    Permission.USERS_ASSIGN_ROLE: frozenset({Role.OWNER}),
    Permission.PRODUCTS_READ: _EVERYONE,
    Permission.PRODUCTS_WRITE: frozenset({Role.OWNER}),
    Permission.CUSTOMERS_MANAGE: _STAFF,
    Permission.TRANSACTIONS_MANAGE: _STAFF,
}


def is_allowed(permission: Permission, role: Role) -> bool:
    """Pure policy lookup, no request involved."""
    return role in POLICY[permission]


def extract_bearer_token(authorization: Optional[str]) -> str:
    """
    Pull the token out of an Authorization header value.

    Raises:
        MissingTokenError: Header absent or blank.
        InvalidTokenError: Anything other than "Bearer <token>".
    """
    if authorization is None or not authorization.strip():
        raise MissingTokenError()
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != BEARER_SCHEME:
        raise InvalidTokenError(context={"reason": "malformed Authorization header"})
    return parts[1]


async def get_current_claims(
    request: Request,
    authorization: Optional[str] = Header(default=None),
) -> TokenClaims:
    """
    Authenticate the request from its bearer token.

    On success the caller's id and role are also attached to
    request.state (user_id, user_role) for downstream consumers such as
    logging.
    """
    token = extract_bearer_token(authorization)
    try:
        claims = verify_token(token)
    except ExpiredTokenError:
        logger.info("Rejected expired token on %s %s", request.method, request.url.path)
        raise
    except InvalidTokenError:
        logger.warning("Rejected invalid token on %s %s", request.method, request.url.path)
        raise

    request.state.user_id = claims.id
    request.state.user_role = claims.role
    return claims


def _describe(roles: Iterable[Role]) -> str:
    # Highest role first: "owner or admin"
    ordered = [role.value for role in Role if role in set(roles)]
    return " or ".join(ordered)


def require_any_of(roles: Iterable[Role]) -> Callable[..., TokenClaims]:
    """
    Build a guard that passes when the caller's role is in `roles`.

    Raises ForbiddenError("Require owner or admin role") otherwise.
    """
    allowed = frozenset(roles)
    message = f"Require {_describe(allowed)} role"

    async def guard(claims: TokenClaims = Depends(get_current_claims)) -> TokenClaims:
        if claims.role not in allowed:
            raise ForbiddenError(message=message, context={"user_id": claims.id})
        return claims

    return guard


def require_role(role: Role) -> Callable[..., TokenClaims]:
    """Build a guard that passes only for exactly `role`."""
    return require_any_of([role])


def authorize(permission: Permission) -> Callable[..., TokenClaims]:
    """Build the guard for a permission from the POLICY table."""
    return require_any_of(POLICY[permission])
