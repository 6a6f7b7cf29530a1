"""
Laundry API Backend: Transaction Service
==========================================

What:  Records sales and serves the denormalized transaction view.
Who:   Called by routes/transactions.py (admin and owner only).

Creation flow (POST /transactions):
    ┌──────────────┐   ┌──────────────┐   ┌─────────────┐   ┌──────────────┐
    │ price lookup │──▶│ customer     │──▶│ INSERT      │──▶│ re-read via  │
    │ (product)    │   │ lookup       │   │ total=p×qty │   │ 4-way join   │
    └──────────────┘   └──────────────┘   └─────────────┘   └──────────────┘
          │ none              │ none             │ FK violation
          ▼                   ▼                  ▼
     404 Product ID      404 Customer ID    404 User ID
       not found           not found          not found

    The price lookup and the insert are separate statements. A concurrent
    price edit between the two is accepted: the sale records whichever
    price was read. Once written, total_price is never recomputed.
"""

import logging
from typing import List

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from laundryapi.exceptions import NotFoundError, ReferenceNotFoundError
from laundryapi.repositories import customers as customers_repo
from laundryapi.repositories import products as products_repo
from laundryapi.repositories import transactions as transactions_repo
from laundryapi.schemas.common import DataResponse, MutationResponse, WriteResultOut
from laundryapi.schemas.transaction import TransactionCreateRequest, TransactionOut
from laundryapi.security.credentials import TokenClaims
from laundryapi.services.store_errors import (
    as_store_error,
    commit_or_raise,
    is_foreign_key_violation,
)

logger = logging.getLogger(__name__)


def compute_total_price(unit_price: float, quantity: int) -> float:
    """Total charged for a sale: unit price at the time of sale × quantity."""
    return unit_price * quantity


class TransactionService:

    async def _fetch(self, db: AsyncSession, transaction_id: int) -> TransactionOut:
        try:
            row = await transactions_repo.get_transaction_by_id(db, transaction_id)
        except SQLAlchemyError as e:
            raise as_store_error(e, "get_transaction", {"transaction_id": transaction_id}) from e
        if row is None:
            raise NotFoundError(resource="Transaction", context={"transaction_id": transaction_id})
        return TransactionOut.from_row(row)

    async def list_transactions(self, db: AsyncSession) -> DataResponse[List[TransactionOut]]:
        try:
            rows = await transactions_repo.list_transactions(db)
        except SQLAlchemyError as e:
            raise as_store_error(e, "list_transactions") from e
        return DataResponse[List[TransactionOut]](
            data=[TransactionOut.from_row(row) for row in rows]
        )

    async def get_transaction(
        self, db: AsyncSession, transaction_id: int
    ) -> DataResponse[TransactionOut]:
        return DataResponse[TransactionOut](data=await self._fetch(db, transaction_id))

    async def create_transaction(
        self, db: AsyncSession, claims: TokenClaims, payload: TransactionCreateRequest
    ) -> MutationResponse[TransactionOut]:
        """
        Record a sale by the authenticated staff member.

        Raises:
            ReferenceNotFoundError: Unknown product, customer, or a deleted
                                    caller account (→ 404)
            StoreError:             Any other store failure (→ 500)
        """
        context = {
            "user_id": claims.id,
            "customer_id": payload.customer_id,
            "product_id": payload.product_id,
        }
        try:
            unit_price = await products_repo.get_product_price(db, payload.product_id)
            if unit_price is None:
                raise ReferenceNotFoundError(resource="Product", context=context)

            customer = await customers_repo.get_customer_by_id(db, payload.customer_id)
            if customer is None:
                raise ReferenceNotFoundError(resource="Customer", context=context)

            result = await transactions_repo.create_transaction(
                db,
                user_id=claims.id,
                customer_id=payload.customer_id,
                product_id=payload.product_id,
                quantity=payload.qty,
                total_price=compute_total_price(unit_price, payload.qty),
            )
        except IntegrityError as e:
            # Product and customer exist at this point; the failing reference is
            # the caller's own account (deleted while its token is still valid)
            if is_foreign_key_violation(e):
                raise ReferenceNotFoundError(resource="User", context=context) from e
            raise as_store_error(e, "create_transaction", context) from e
        except SQLAlchemyError as e:
            raise as_store_error(e, "create_transaction", context) from e

        await commit_or_raise(db, "create_transaction", context)

        logger.info(
            "Transaction id=%s recorded by user id=%s: product=%s qty=%s",
            result.last_insert_id,
            claims.id,
            payload.product_id,
            payload.qty,
        )
        return MutationResponse[TransactionOut](
            message="Transaction added successfully",
            result=WriteResultOut.of(result),
            data=await self._fetch(db, result.last_insert_id),
        )


transaction_service = TransactionService()
