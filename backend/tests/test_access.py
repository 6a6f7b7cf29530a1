"""
Laundry API Backend: Access Control Unit Tests
================================================

What we test:
    ✅ Policy table grants the documented roles
    ✅ Bearer header parsing (missing → 403 class, malformed → 401 class)
    ✅ Role guards pass or raise ForbiddenError with the role wording
"""

import pytest

from laundryapi.exceptions import ForbiddenError, InvalidTokenError, MissingTokenError
from laundryapi.models.user import Role
from laundryapi.security.access import (
    POLICY,
    Permission,
    authorize,
    extract_bearer_token,
    is_allowed,
    require_any_of,
    require_role,
)
from laundryapi.security.credentials import TokenClaims


class TestPolicy:

    def test_every_permission_has_an_entry(self):
        assert set(POLICY) == set(Permission)

    @pytest.mark.parametrize(
        "permission, allowed",
        [
            (Permission.AUTHENTICATED, {Role.OWNER, Role.ADMIN, Role.USER}),
            (Permission.USERS_MANAGE, {Role.OWNER, Role.ADMIN}),
            (Permission.USERS_ASSIGN_ROLE, {Role.OWNER}),
            (Permission.PRODUCTS_READ, {Role.OWNER, Role.ADMIN, Role.USER}),
            (Permission.PRODUCTS_WRITE, {Role.OWNER}),
            (Permission.CUSTOMERS_MANAGE, {Role.OWNER, Role.ADMIN}),
            (Permission.TRANSACTIONS_MANAGE, {Role.OWNER, Role.ADMIN}),
        ],
    )
    def test_roles_per_permission(self, permission, allowed):
        assert {role for role in Role if is_allowed(permission, role)} == allowed


class TestBearerExtraction:

    def test_valid_header(self):
        assert extract_bearer_token("Bearer abc.def.ghi") == "abc.def.ghi"

    def test_scheme_is_case_insensitive(self):
        assert extract_bearer_token("bearer tok") == "tok"

    @pytest.mark.parametrize("header", [None, "", "   "])
    def test_missing_header(self, header):
        with pytest.raises(MissingTokenError):
            extract_bearer_token(header)

    @pytest.mark.parametrize("header", ["tok", "Basic dXNlcjpwYXNz", "Bearer a b"])
    def test_malformed_header(self, header):
        with pytest.raises(InvalidTokenError):
            extract_bearer_token(header)


class TestRoleGuards:

    @pytest.mark.asyncio
    async def test_guard_passes_allowed_role(self):
        claims = TokenClaims(id=2, role=Role.ADMIN)
        guard = authorize(Permission.CUSTOMERS_MANAGE)
        assert await guard(claims=claims) is claims

    @pytest.mark.asyncio
    async def test_guard_rejects_with_role_wording(self):
        guard = require_any_of([Role.ADMIN, Role.OWNER])
        with pytest.raises(ForbiddenError) as exc_info:
            await guard(claims=TokenClaims(id=3, role=Role.USER))
        assert exc_info.value.message == "Require owner or admin role"
        assert exc_info.value.status_code == 403

    @pytest.mark.asyncio
    async def test_require_role_is_exact(self):
        guard = require_role(Role.OWNER)
        with pytest.raises(ForbiddenError) as exc_info:
            await guard(claims=TokenClaims(id=2, role=Role.ADMIN))
        assert exc_info.value.message == "Require owner role"
