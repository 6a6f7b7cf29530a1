"""
Laundry API Backend: Customer Service
=======================================

What:  CRUD over the customer book. Admin and owner only (route guard).
"""

import logging
from typing import List

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from laundryapi.exceptions import ConflictError, NoRowsAffectedError, NotFoundError
from laundryapi.repositories import customers as customers_repo
from laundryapi.schemas.common import (
    DataResponse,
    DeleteResponse,
    MutationResponse,
    WriteResultOut,
)
from laundryapi.schemas.customer import CustomerOut, CustomerRequest
from laundryapi.services.store_errors import (
    as_store_error,
    commit_or_raise,
    is_foreign_key_violation,
)

logger = logging.getLogger(__name__)


class CustomerService:

    async def _fetch(self, db: AsyncSession, customer_id: int) -> CustomerOut:
        try:
            row = await customers_repo.get_customer_by_id(db, customer_id)
        except SQLAlchemyError as e:
            raise as_store_error(e, "get_customer", {"customer_id": customer_id}) from e
        if row is None:
            raise NotFoundError(resource="Customer", context={"customer_id": customer_id})
        return CustomerOut.model_validate(dict(row))

    async def list_customers(self, db: AsyncSession) -> DataResponse[List[CustomerOut]]:
        try:
            rows = await customers_repo.list_customers(db)
        except SQLAlchemyError as e:
            raise as_store_error(e, "list_customers") from e
        return DataResponse[List[CustomerOut]](
            data=[CustomerOut.model_validate(dict(row)) for row in rows]
        )

    async def get_customer(self, db: AsyncSession, customer_id: int) -> DataResponse[CustomerOut]:
        return DataResponse[CustomerOut](data=await self._fetch(db, customer_id))

    async def create_customer(
        self, db: AsyncSession, payload: CustomerRequest
    ) -> MutationResponse[CustomerOut]:
        try:
            result = await customers_repo.create_customer(
                db,
                name=payload.name,
                phone_number=payload.phone_number,
                address=payload.address,
            )
        except SQLAlchemyError as e:
            raise as_store_error(e, "create_customer") from e

        await commit_or_raise(db, "create_customer")

        logger.info("Customer created (id=%s)", result.last_insert_id)
        return MutationResponse[CustomerOut](
            message="Customer added successfully",
            result=WriteResultOut.of(result),
            data=await self._fetch(db, result.last_insert_id),
        )

    async def update_customer(
        self, db: AsyncSession, customer_id: int, payload: CustomerRequest
    ) -> MutationResponse[CustomerOut]:
        try:
            result = await customers_repo.update_customer(
                db,
                customer_id,
                name=payload.name,
                phone_number=payload.phone_number,
                address=payload.address,
            )
        except SQLAlchemyError as e:
            raise as_store_error(e, "update_customer", {"customer_id": customer_id}) from e

        if result.rows_affected == 0:
            raise NoRowsAffectedError(
                resource="Customer", action="updated", context={"customer_id": customer_id}
            )

        await commit_or_raise(db, "update_customer", {"customer_id": customer_id})

        return MutationResponse[CustomerOut](
            message="Customer updated successfully",
            result=WriteResultOut.of(result),
            data=await self._fetch(db, customer_id),
        )

    async def delete_customer(self, db: AsyncSession, customer_id: int) -> DeleteResponse:
        try:
            result = await customers_repo.delete_customer(db, customer_id)
        except IntegrityError as e:
            if is_foreign_key_violation(e):
                raise ConflictError(
                    message="Customer is referenced by existing transactions",
                    context={"customer_id": customer_id},
                ) from e
            raise as_store_error(e, "delete_customer", {"customer_id": customer_id}) from e
        except SQLAlchemyError as e:
            raise as_store_error(e, "delete_customer", {"customer_id": customer_id}) from e

        if result.rows_affected == 0:
            raise NoRowsAffectedError(
                resource="Customer", action="deleted", context={"customer_id": customer_id}
            )

        await commit_or_raise(db, "delete_customer", {"customer_id": customer_id})

        logger.info("Customer id=%s deleted", customer_id)
        return DeleteResponse(
            message="Customer deleted successfully", result=WriteResultOut.of(result)
        )


customer_service = CustomerService()
