"""
Laundry API Backend: Authentication Service
=============================================

What:  Registration and login.
Who:   Called by routes/auth.py.

Registration flow:
    body → hash password (threadpool) → INSERT role='user' → 201
           └─ UNIQUE violation on username/email → 400 "<username> is already registered"

Login flow:
    body → SELECT by username → bcrypt verify → issue token → 200
           └─ unknown username OR wrong password → 401, same body for both
"""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from laundryapi.exceptions import ConflictError, InvalidCredentialsError
from laundryapi.models.user import Role
from laundryapi.repositories import users as users_repo
from laundryapi.schemas.common import MutationResponse, WriteResultOut
from laundryapi.schemas.user import (
    LoginProfileOut,
    LoginRequest,
    LoginResponse,
    RegisteredUserOut,
    RegisterRequest,
)
from laundryapi.security.credentials import (
    TokenClaims,
    hash_password_async,
    issue_token,
    verify_password_async,
)
from laundryapi.services.store_errors import (
    as_store_error,
    commit_or_raise,
    is_unique_violation,
)

logger = logging.getLogger(__name__)


def already_registered(username: str) -> ConflictError:
    return ConflictError(
        message=f"{username} is already registered, please use another username",
        context={"username": username},
    )


class AuthService:
    """Stateless; one shared instance below."""

    async def register(
        self, db: AsyncSession, payload: RegisterRequest
    ) -> MutationResponse[RegisteredUserOut]:
        """
        Create a 'user' account.

        Raises:
            ValidationError: Password unusable by bcrypt (→ 400)
            ConflictError:   Username or email taken (→ 400)
            StoreError:      Any other store failure (→ 500)
        """
        password_hash = await hash_password_async(payload.password)

        try:
            result = await users_repo.create_user(
                db,
                name=payload.name,
                username=payload.username,
                email=payload.email,
                password_hash=password_hash,
                role=Role.USER.value,
            )
        except IntegrityError as e:
            if is_unique_violation(e):
                raise already_registered(payload.username) from e
            raise as_store_error(e, "register") from e
        except SQLAlchemyError as e:
            raise as_store_error(e, "register") from e

        await commit_or_raise(db, "register", {"username": payload.username})

        logger.info("Registered user %s (id=%s)", payload.username, result.last_insert_id)
        return MutationResponse[RegisteredUserOut](
            message="User registered successfully",
            result=WriteResultOut.of(result),
            data=RegisteredUserOut(
                name=payload.name,
                username=payload.username,
                email=payload.email,
                role=Role.USER.value,
            ),
        )

    async def login(self, db: AsyncSession, payload: LoginRequest) -> LoginResponse:
        """
        Verify credentials and issue a session token.

        Raises:
            InvalidCredentialsError: Unknown username or wrong password (→ 401)
            StoreError:              Lookup failed (→ 500)
        """
        try:
            user = await users_repo.get_user_by_username(db, payload.username)
        except SQLAlchemyError as e:
            raise as_store_error(e, "login") from e

        if user is None or not await verify_password_async(payload.password, user["password"]):
            logger.warning("Failed login for username %r", payload.username)
            raise InvalidCredentialsError()

        token = issue_token(TokenClaims(id=user["id"], role=Role(user["role"])))
        logger.info("User %s (id=%s) logged in", user["username"], user["id"])
        return LoginResponse(
            auth=True,
            token=token,
            data=LoginProfileOut.model_validate(dict(user)),
        )


auth_service = AuthService()
