"""
Laundry API Backend: Product Service
======================================

What:  CRUD over the product price list.
Who:   Called by routes/products.py. Reads are open to every
       authenticated role; writes are owner-only (enforced by the route).
"""

import logging
from typing import List

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from laundryapi.exceptions import ConflictError, NoRowsAffectedError, NotFoundError
from laundryapi.repositories import products as products_repo
from laundryapi.schemas.common import (
    DataResponse,
    DeleteResponse,
    MutationResponse,
    WriteResultOut,
)
from laundryapi.schemas.product import ProductOut, ProductRequest
from laundryapi.services.store_errors import (
    as_store_error,
    commit_or_raise,
    is_foreign_key_violation,
)

logger = logging.getLogger(__name__)


class ProductService:

    async def _fetch(self, db: AsyncSession, product_id: int) -> ProductOut:
        try:
            row = await products_repo.get_product_by_id(db, product_id)
        except SQLAlchemyError as e:
            raise as_store_error(e, "get_product", {"product_id": product_id}) from e
        if row is None:
            raise NotFoundError(resource="Product", context={"product_id": product_id})
        return ProductOut.model_validate(dict(row))

    async def list_products(self, db: AsyncSession) -> DataResponse[List[ProductOut]]:
        try:
            rows = await products_repo.list_products(db)
        except SQLAlchemyError as e:
            raise as_store_error(e, "list_products") from e
        return DataResponse[List[ProductOut]](
            data=[ProductOut.model_validate(dict(row)) for row in rows]
        )

    async def get_product(self, db: AsyncSession, product_id: int) -> DataResponse[ProductOut]:
        return DataResponse[ProductOut](data=await self._fetch(db, product_id))

    async def create_product(
        self, db: AsyncSession, payload: ProductRequest
    ) -> MutationResponse[ProductOut]:
        try:
            result = await products_repo.create_product(
                db, name=payload.name, price=payload.price, type=payload.type
            )
        except SQLAlchemyError as e:
            raise as_store_error(e, "create_product") from e

        await commit_or_raise(db, "create_product")

        logger.info("Product '%s' created (id=%s)", payload.name, result.last_insert_id)
        return MutationResponse[ProductOut](
            message="Product added successfully",
            result=WriteResultOut.of(result),
            data=await self._fetch(db, result.last_insert_id),
        )

    async def update_product(
        self, db: AsyncSession, product_id: int, payload: ProductRequest
    ) -> MutationResponse[ProductOut]:
        """
        Rewrite a product.

        Existing transactions keep the total they were sold at; only new
        sales see the new price.
        """
        try:
            result = await products_repo.update_product(
                db, product_id, name=payload.name, price=payload.price, type=payload.type
            )
        except SQLAlchemyError as e:
            raise as_store_error(e, "update_product", {"product_id": product_id}) from e

        if result.rows_affected == 0:
            raise NoRowsAffectedError(
                resource="Product", action="updated", context={"product_id": product_id}
            )

        await commit_or_raise(db, "update_product", {"product_id": product_id})

        logger.info("Product id=%s updated", product_id)
        return MutationResponse[ProductOut](
            message="Product updated successfully",
            result=WriteResultOut.of(result),
            data=await self._fetch(db, product_id),
        )

    async def delete_product(self, db: AsyncSession, product_id: int) -> DeleteResponse:
        try:
            result = await products_repo.delete_product(db, product_id)
        except IntegrityError as e:
            if is_foreign_key_violation(e):
                raise ConflictError(
                    message="Product is referenced by existing transactions",
                    context={"product_id": product_id},
                ) from e
            raise as_store_error(e, "delete_product", {"product_id": product_id}) from e
        except SQLAlchemyError as e:
            raise as_store_error(e, "delete_product", {"product_id": product_id}) from e

        if result.rows_affected == 0:
            raise NoRowsAffectedError(
                resource="Product", action="deleted", context={"product_id": product_id}
            )

        await commit_or_raise(db, "delete_product", {"product_id": product_id})

        logger.info("Product id=%s deleted", product_id)
        return DeleteResponse(
            message="Product deleted successfully", result=WriteResultOut.of(result)
        )


product_service = ProductService()
