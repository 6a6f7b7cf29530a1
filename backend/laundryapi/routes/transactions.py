"""
Laundry API Backend: Transaction Routes
=========================================

What:  GET/POST {prefix}/transactions. Admin or owner only.
Why no PUT/DELETE: a recorded sale is immutable.
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from laundryapi.config import settings
from laundryapi.database import get_db_session
from laundryapi.schemas.common import DataResponse, ErrorResponse, MutationResponse
from laundryapi.schemas.transaction import TransactionCreateRequest, TransactionOut
from laundryapi.security.access import Permission, authorize
from laundryapi.security.credentials import TokenClaims
from laundryapi.services.transaction_service import transaction_service

router = APIRouter(
    prefix=f"{settings.api_prefix}/transactions",
    tags=["Transactions"],
    responses={
        401: {"description": "Invalid or expired token", "model": ErrorResponse},
        403: {"description": "No token or insufficient role", "model": ErrorResponse},
    },
)


@router.get(
    "",
    response_model=DataResponse[List[TransactionOut]],
    dependencies=[Depends(authorize(Permission.TRANSACTIONS_MANAGE))],
    summary="List transactions",
    description="Each sale joined with its customer, product and the staff member who recorded it.",
)
async def list_transactions(
    db: AsyncSession = Depends(get_db_session),
) -> DataResponse[List[TransactionOut]]:
    return await transaction_service.list_transactions(db)


@router.get(
    "/{transaction_id}",
    response_model=DataResponse[TransactionOut],
    responses={404: {"description": "Transaction not found", "model": ErrorResponse}},
    dependencies=[Depends(authorize(Permission.TRANSACTIONS_MANAGE))],
    summary="Read one transaction",
)
async def get_transaction(
    transaction_id: int, db: AsyncSession = Depends(get_db_session)
) -> DataResponse[TransactionOut]:
    return await transaction_service.get_transaction(db, transaction_id)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=MutationResponse[TransactionOut],
    responses={
        400: {"description": "Invalid body", "model": ErrorResponse},
        404: {"description": "Unknown product or customer", "model": ErrorResponse},
    },
    summary="Record a sale",
    description=(
        "Body: {customerId, productId, qty}. The total is the product's current "
        "price times qty and is fixed at creation."
    ),
)
async def create_transaction(
    payload: TransactionCreateRequest,
    claims: TokenClaims = Depends(authorize(Permission.TRANSACTIONS_MANAGE)),
    db: AsyncSession = Depends(get_db_session),
) -> MutationResponse[TransactionOut]:
    return await transaction_service.create_transaction(db, claims, payload)
