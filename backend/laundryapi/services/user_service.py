"""
Laundry API Backend: User Service
===================================

What:  Profile access, user administration, and owner seeding.
Who:   Called by routes/users.py and by the application lifespan.

Rules enforced here (beyond the route's role guard):
    - User id 1 is the owner. Only the owner may read it through
      GET /users/{id}; nobody may delete it, not even the owner.
    - Self-updates (PUT /profile) never change the caller's role.
    - Owner updates may set a role. Other accounts may be made 'user' or
      'admin'; the owner record can only be reached by the owner itself.
    - The admin user listing omits the owner record.
"""

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from laundryapi.config import settings
from laundryapi.exceptions import (
    ConflictError,
    ForbiddenError,
    NoRowsAffectedError,
    NotFoundError,
    ProtectedRecordError,
    ValidationError,
)
from laundryapi.models.user import OWNER_ID, Role
from laundryapi.repositories import users as users_repo
from laundryapi.schemas.common import (
    DataResponse,
    DeleteResponse,
    MutationResponse,
    WriteResultOut,
)
from laundryapi.schemas.user import OwnerUserUpdateRequest, ProfileUpdateRequest, UserOut
from laundryapi.security.credentials import TokenClaims, hash_password_async
from laundryapi.services.auth_service import already_registered
from laundryapi.services.store_errors import (
    as_store_error,
    commit_or_raise,
    is_foreign_key_violation,
    is_unique_violation,
)

logger = logging.getLogger(__name__)

# Roles the owner may hand out to accounts other than its own
ASSIGNABLE_ROLES = frozenset({Role.USER, Role.ADMIN})


class UserService:
    """Stateless; one shared instance below."""

    async def _fetch(self, db: AsyncSession, user_id: int) -> UserOut:
        try:
            row = await users_repo.get_user_by_id(db, user_id)
        except SQLAlchemyError as e:
            raise as_store_error(e, "get_user", {"user_id": user_id}) from e
        if row is None:
            raise NotFoundError(resource="User", context={"user_id": user_id})
        return UserOut.model_validate(dict(row))

    async def get_profile(self, db: AsyncSession, claims: TokenClaims) -> DataResponse[UserOut]:
        """The caller's own record (404 if it was deleted after login)."""
        return DataResponse[UserOut](data=await self._fetch(db, claims.id))

    async def get_user(
        self, db: AsyncSession, claims: TokenClaims, user_id: int
    ) -> DataResponse[UserOut]:
        if user_id == OWNER_ID and claims.role is not Role.OWNER:
            raise ForbiddenError(
                message="You don't have authority over that resource",
                context={"user_id": claims.id, "target": user_id},
            )
        return DataResponse[UserOut](data=await self._fetch(db, user_id))

    async def list_users(self, db: AsyncSession) -> DataResponse[List[UserOut]]:
        """Every account except the owner's."""
        try:
            rows = await users_repo.list_users(db)
        except SQLAlchemyError as e:
            raise as_store_error(e, "list_users") from e
        return DataResponse[List[UserOut]](
            data=[UserOut.model_validate(dict(row)) for row in rows if row["id"] != OWNER_ID]
        )

    async def _apply_update(
        self,
        db: AsyncSession,
        user_id: int,
        payload: ProfileUpdateRequest,
        role: Optional[Role],
    ) -> MutationResponse[UserOut]:
        password_hash = await hash_password_async(payload.password)
        try:
            result = await users_repo.update_user(
                db,
                user_id,
                name=payload.name,
                username=payload.username,
                email=payload.email,
                password_hash=password_hash,
                role=role.value if role is not None else None,
            )
        except IntegrityError as e:
            if is_unique_violation(e):
                raise already_registered(payload.username) from e
            raise as_store_error(e, "update_user", {"user_id": user_id}) from e
        except SQLAlchemyError as e:
            raise as_store_error(e, "update_user", {"user_id": user_id}) from e

        if result.rows_affected == 0:
            raise NoRowsAffectedError(resource="User", action="updated", context={"user_id": user_id})

        await commit_or_raise(db, "update_user", {"user_id": user_id})

        logger.info("Updated user id=%s", user_id)
        return MutationResponse[UserOut](
            message="User updated successfully",
            result=WriteResultOut.of(result),
            data=await self._fetch(db, user_id),
        )

    async def update_profile(
        self, db: AsyncSession, claims: TokenClaims, payload: ProfileUpdateRequest
    ) -> MutationResponse[UserOut]:
        """Self-update: name, username, email and password; role untouched."""
        return await self._apply_update(db, claims.id, payload, role=None)

    async def owner_update_user(
        self, db: AsyncSession, user_id: int, payload: OwnerUserUpdateRequest
    ) -> MutationResponse[UserOut]:
        """
        Owner-update of any account, including its role.

        The route is owner-only, so reaching id 1 here means the owner is
        editing its own record; any role is accepted for it. Every other
        account may only be made 'user' or 'admin'.
        """
        try:
            role = Role(payload.role)
        except ValueError:
            role = None
        if role is None or (user_id != OWNER_ID and role not in ASSIGNABLE_ROLES):
            raise ValidationError(
                message="invalid role, role must admin or user",
                field="role",
                context={"role": payload.role},
            )
        return await self._apply_update(db, user_id, payload, role=role)

    async def delete_user(
        self, db: AsyncSession, claims: TokenClaims, user_id: int
    ) -> DeleteResponse:
        """
        Remove an account.

        Raises:
            ProtectedRecordError: Target is the owner record (→ 400)
            ConflictError:       Account has recorded transactions (→ 400)
            NoRowsAffectedError: No such id (→ 400)
        """
        if user_id == OWNER_ID:
            if claims.role is Role.OWNER:
                message = "You are the owner, if you delete your own account who becomes the owner?"
            else:
                message = "You don't have authority over that method"
            raise ProtectedRecordError(message=message, context={"user_id": claims.id})

        try:
            result = await users_repo.delete_user(db, user_id)
        except IntegrityError as e:
            if is_foreign_key_violation(e):
                raise ConflictError(
                    message="User is referenced by existing transactions",
                    context={"user_id": user_id},
                ) from e
            raise as_store_error(e, "delete_user", {"user_id": user_id}) from e
        except SQLAlchemyError as e:
            raise as_store_error(e, "delete_user", {"user_id": user_id}) from e

        if result.rows_affected == 0:
            raise NoRowsAffectedError(resource="User", action="deleted", context={"user_id": user_id})

        await commit_or_raise(db, "delete_user", {"user_id": user_id})

        logger.info("User id=%s deleted by user id=%s", user_id, claims.id)
        return DeleteResponse(message="User deleted successfully", result=WriteResultOut.of(result))

    async def ensure_owner(self, db: AsyncSession) -> bool:
        """
        Seed the owner account into an empty users table.

        What:    Inserts OWNER_* settings as the first row, which SQLite
                 numbers id 1.
        When:    Application startup, after the schema exists.
        Returns: True if the owner was created, False if users already exist.
        """
        if await users_repo.count_users(db) > 0:
            return False

        result = await users_repo.create_user(
            db,
            name=settings.owner_name,
            username=settings.owner_username,
            email=settings.owner_email,
            password_hash=await hash_password_async(settings.owner_password),
            role=Role.OWNER.value,
        )
        if result.last_insert_id != OWNER_ID:
            logger.warning(
                "Owner seeded with id=%s instead of %s; the users table was not fresh",
                result.last_insert_id,
                OWNER_ID,
            )
        logger.info("Seeded owner account '%s'", settings.owner_username)
        return True


user_service = UserService()
