"""
Laundry API Backend: Authentication Routes
============================================

What:  POST {prefix}/auth/register and POST {prefix}/auth/login.
Who:   Called by the frontend sign-up and sign-in forms. No token needed.
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from laundryapi.config import settings
from laundryapi.database import get_db_session
from laundryapi.schemas.common import ErrorResponse, MutationResponse
from laundryapi.schemas.user import (
    LoginRequest,
    LoginResponse,
    RegisteredUserOut,
    RegisterRequest,
)
from laundryapi.services.auth_service import auth_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix=f"{settings.api_prefix}/auth", tags=["Auth"])


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=MutationResponse[RegisteredUserOut],
    responses={
        400: {"description": "Invalid body or username already taken", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Register a new user account",
    description=(
        "Creates an account with role 'user'. A role sent in the body is ignored. "
        "The password is stored as a bcrypt hash."
    ),
)
async def register(
    payload: RegisterRequest,
    db: AsyncSession = Depends(get_db_session),
) -> MutationResponse[RegisteredUserOut]:
    return await auth_service.register(db, payload)


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        400: {"description": "Missing username or password", "model": ErrorResponse},
        401: {"description": "Invalid username or password", "model": ErrorResponse},
    },
    summary="Exchange credentials for a bearer token",
)
async def login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
) -> LoginResponse:
    """
    Verify the credentials and issue a signed token.

    The same 401 body is returned for an unknown username and for a wrong
    password.
    """
    return await auth_service.login(db, payload)
