"""
Laundry API Backend: Customer Routes
======================================

What:  CRUD over {prefix}/customers. Admin or owner only; the guard is
       attached once at router level.
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
from laundryapi.schemas.customer import CustomerOut, CustomerRequest
from laundryapi.security.access import Permission, authorize
from laundryapi.services.customer_service import customer_service

router = APIRouter(
    prefix=f"{settings.api_prefix}/customers",
    tags=["Customers"],
    dependencies=[Depends(authorize(Permission.CUSTOMERS_MANAGE))],
    responses={
        401: {"description": "Invalid or expired token", "model": ErrorResponse},
        403: {"description": "No token or insufficient role", "model": ErrorResponse},
    },
)


@router.get("", response_model=DataResponse[List[CustomerOut]], summary="List customers")
async def list_customers(db: AsyncSession = Depends(get_db_session)) -> DataResponse[List[CustomerOut]]:
    return await customer_service.list_customers(db)


@router.get(
    "/{customer_id}",
    response_model=DataResponse[CustomerOut],
    responses={404: {"description": "Customer not found", "model": ErrorResponse}},
    summary="Read one customer",
)
async def get_customer(
    customer_id: int, db: AsyncSession = Depends(get_db_session)
) -> DataResponse[CustomerOut]:
    return await customer_service.get_customer(db, customer_id)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=MutationResponse[CustomerOut],
    responses={400: {"description": "Invalid body", "model": ErrorResponse}},
    summary="Add a customer",
)
async def create_customer(
    payload: CustomerRequest, db: AsyncSession = Depends(get_db_session)
) -> MutationResponse[CustomerOut]:
    return await customer_service.create_customer(db, payload)


@router.put(
    "/{customer_id}",
    status_code=status.HTTP_201_CREATED,
    response_model=MutationResponse[CustomerOut],
    responses={400: {"description": "Invalid body or no such id", "model": ErrorResponse}},
    summary="Update a customer",
)
async def update_customer(
    customer_id: int,
    payload: CustomerRequest,
    db: AsyncSession = Depends(get_db_session),
) -> MutationResponse[CustomerOut]:
    return await customer_service.update_customer(db, customer_id, payload)


@router.delete(
    "/{customer_id}",
    response_model=DeleteResponse,
    responses={400: {"description": "Referenced by transactions or no such id", "model": ErrorResponse}},
    summary="Delete a customer",
)
async def delete_customer(
    customer_id: int, db: AsyncSession = Depends(get_db_session)
) -> DeleteResponse:
    return await customer_service.delete_customer(db, customer_id)
