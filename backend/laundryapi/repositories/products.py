"""Statements against the `products` table."""

from typing import List, Optional

from sqlalchemy import delete, insert, select, update
from sqlalchemy.engine import RowMapping
from sqlalchemy.ext.asyncio import AsyncSession

from laundryapi.models.product import Product
from laundryapi.repositories.base import WriteResult

products = Product.__table__


async def list_products(db: AsyncSession) -> List[RowMapping]:
    result = await db.execute(select(products).order_by(products.c.id))
    return list(result.mappings().all())


async def get_product_by_id(db: AsyncSession, product_id: int) -> Optional[RowMapping]:
    result = await db.execute(select(products).where(products.c.id == product_id))
    return result.mappings().one_or_none()


async def get_product_price(db: AsyncSession, product_id: int) -> Optional[float]:
    """Unit price of a product, or None when the product does not exist."""
    result = await db.execute(select(products.c.price).where(products.c.id == product_id))
    return result.scalar_one_or_none()


async def create_product(db: AsyncSession, name: str, price: float, type: str) -> WriteResult:
    result = await db.execute(insert(products).values(name=name, price=price, type=type))
    return WriteResult.from_insert(result)


async def update_product(
    db: AsyncSession, product_id: int, name: str, price: float, type: str
) -> WriteResult:
    result = await db.execute(
        update(products)
        .where(products.c.id == product_id)
        .values(name=name, price=price, type=type)
    )
    return WriteResult.from_change(result)


async def delete_product(db: AsyncSession, product_id: int) -> WriteResult:
    result = await db.execute(delete(products).where(products.c.id == product_id))
    return WriteResult.from_change(result)
