"""
Laundry API Backend: Product Routes
=====================================

What:  The product price list. Every role may read it; only the owner
       may change it.
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
from laundryapi.schemas.product import ProductOut, ProductRequest
from laundryapi.security.access import Permission, authorize
from laundryapi.services.product_service import product_service

router = APIRouter(
    prefix=f"{settings.api_prefix}/products",
    tags=["Products"],
    responses={
        401: {"description": "Invalid or expired token", "model": ErrorResponse},
        403: {"description": "No token or insufficient role", "model": ErrorResponse},
    },
)


@router.get(
    "",
    response_model=DataResponse[List[ProductOut]],
    dependencies=[Depends(authorize(Permission.PRODUCTS_READ))],
    summary="List products",
)
async def list_products(db: AsyncSession = Depends(get_db_session)) -> DataResponse[List[ProductOut]]:
    return await product_service.list_products(db)


@router.get(
    "/{product_id}",
    response_model=DataResponse[ProductOut],
    responses={404: {"description": "Product not found", "model": ErrorResponse}},
    dependencies=[Depends(authorize(Permission.PRODUCTS_READ))],
    summary="Read one product",
)
async def get_product(
    product_id: int, db: AsyncSession = Depends(get_db_session)
) -> DataResponse[ProductOut]:
    return await product_service.get_product(db, product_id)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=MutationResponse[ProductOut],
    responses={400: {"description": "Invalid body", "model": ErrorResponse}},
    dependencies=[Depends(authorize(Permission.PRODUCTS_WRITE))],
    summary="Add a product",
    description="Owner only. Price must be strictly positive.",
)
async def create_product(
    payload: ProductRequest, db: AsyncSession = Depends(get_db_session)
) -> MutationResponse[ProductOut]:
    return await product_service.create_product(db, payload)


@router.put(
    "/{product_id}",
    status_code=status.HTTP_201_CREATED,
    response_model=MutationResponse[ProductOut],
    responses={400: {"description": "Invalid body or no such id", "model": ErrorResponse}},
    dependencies=[Depends(authorize(Permission.PRODUCTS_WRITE))],
    summary="Update a product",
    description="Owner only. Totals of transactions already recorded do not change.",
)
async def update_product(
    product_id: int,
    payload: ProductRequest,
    db: AsyncSession = Depends(get_db_session),
) -> MutationResponse[ProductOut]:
    return await product_service.update_product(db, product_id, payload)


@router.delete(
    "/{product_id}",
    response_model=DeleteResponse,
    responses={400: {"description": "Referenced by transactions or no such id", "model": ErrorResponse}},
    dependencies=[Depends(authorize(Permission.PRODUCTS_WRITE))],
    summary="Delete a product",
)
async def delete_product(
    product_id: int, db: AsyncSession = Depends(get_db_session)
) -> DeleteResponse:
    return await product_service.delete_product(db, product_id)
