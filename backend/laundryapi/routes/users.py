"""
Laundry API Backend: User Routes
==================================

What:  Profile self-service and user administration.

Route Inventory:
    GET    {prefix}/profile            any role   own record
    PUT    {prefix}/profile            any role   own name/username/email/password
    GET    {prefix}/users/{id}         any role   id 1 readable by the owner only
    GET    {prefix}/admin/users        staff      everyone but the owner
    DELETE {prefix}/admin/users/{id}   staff      id 1 is never deletable
    PUT    {prefix}/owner/users/{id}   owner      includes the role
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from laundryapi.config import settings
from laundryapi.database import get_db_session
from laundryapi.schemas.common import (
    DataResponse,
    DeleteResponse,
    ErrorResponse,
    MutationResponse,
)
from laundryapi.schemas.user import OwnerUserUpdateRequest, ProfileUpdateRequest, UserOut
from laundryapi.security.access import Permission, authorize, get_current_claims
from laundryapi.security.credentials import TokenClaims
from laundryapi.services.user_service import user_service

router = APIRouter(prefix=settings.api_prefix, tags=["Users"])

_AUTH_ERRORS = {
    401: {"description": "Invalid or expired token", "model": ErrorResponse},
    403: {"description": "No token or insufficient role", "model": ErrorResponse},
}


@router.get(
    "/profile",
    response_model=DataResponse[UserOut],
    responses={**_AUTH_ERRORS, 404: {"description": "Account no longer exists", "model": ErrorResponse}},
    summary="Read the caller's own profile",
)
async def get_profile(
    claims: TokenClaims = Depends(get_current_claims),
    db: AsyncSession = Depends(get_db_session),
) -> DataResponse[UserOut]:
    return await user_service.get_profile(db, claims)


@router.put(
    "/profile",
    status_code=status.HTTP_201_CREATED,
    response_model=MutationResponse[UserOut],
    responses={
        **_AUTH_ERRORS,
        400: {"description": "Invalid body, username taken, or no such account", "model": ErrorResponse},
    },
    summary="Update the caller's own profile",
    description="Rewrites name, username, email and password. The role is never changed here.",
)
async def update_profile(
    payload: ProfileUpdateRequest,
    claims: TokenClaims = Depends(get_current_claims),
    db: AsyncSession = Depends(get_db_session),
) -> MutationResponse[UserOut]:
    return await user_service.update_profile(db, claims, payload)


@router.get(
    "/users/{user_id}",
    response_model=DataResponse[UserOut],
    responses={**_AUTH_ERRORS, 404: {"description": "User not found", "model": ErrorResponse}},
    summary="Read one user",
)
async def get_user(
    user_id: int,
    claims: TokenClaims = Depends(authorize(Permission.AUTHENTICATED)),
    db: AsyncSession = Depends(get_db_session),
) -> DataResponse[UserOut]:
    return await user_service.get_user(db, claims, user_id)


@router.get(
    "/admin/users",
    response_model=DataResponse[List[UserOut]],
    responses=_AUTH_ERRORS,
    summary="List user accounts",
    description="Every account except the owner's. Admin or owner only.",
)
async def list_users(
    claims: TokenClaims = Depends(authorize(Permission.USERS_MANAGE)),
    db: AsyncSession = Depends(get_db_session),
) -> DataResponse[List[UserOut]]:
    return await user_service.list_users(db)


@router.delete(
    "/admin/users/{user_id}",
    response_model=DeleteResponse,
    responses={
        **_AUTH_ERRORS,
        400: {"description": "Owner record, referenced account, or no such id", "model": ErrorResponse},
    },
    summary="Delete a user account",
)
async def delete_user(
    user_id: int,
    claims: TokenClaims = Depends(authorize(Permission.USERS_MANAGE)),
    db: AsyncSession = Depends(get_db_session),
) -> DeleteResponse:
    return await user_service.delete_user(db, claims, user_id)


@router.put(
    "/owner/users/{user_id}",
    status_code=status.HTTP_201_CREATED,
    response_model=MutationResponse[UserOut],
    responses={
        **_AUTH_ERRORS,
        400: {"description": "Invalid body or role, username taken, or no such id", "model": ErrorResponse},
    },
    summary="Update any account, including its role",
    description="Owner only. Other accounts may be given the role 'user' or 'admin'.",
)
async def owner_update_user(
    user_id: int,
    payload: OwnerUserUpdateRequest,
    claims: TokenClaims = Depends(authorize(Permission.USERS_ASSIGN_ROLE)),
    db: AsyncSession = Depends(get_db_session),
) -> MutationResponse[UserOut]:
    return await user_service.owner_update_user(db, user_id, payload)
