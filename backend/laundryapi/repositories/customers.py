"""Statements against the `customers` table."""

from typing import List, Optional

from sqlalchemy import delete, insert, select, update
from sqlalchemy.engine import RowMapping
from sqlalchemy.ext.asyncio import AsyncSession

from laundryapi.models.customer import Customer
from laundryapi.repositories.base import WriteResult

customers = Customer.__table__


async def list_customers(db: AsyncSession) -> List[RowMapping]:
    result = await db.execute(select(customers).order_by(customers.c.id))
    return list(result.mappings().all())


async def get_customer_by_id(db: AsyncSession, customer_id: int) -> Optional[RowMapping]:
    result = await db.execute(select(customers).where(customers.c.id == customer_id))
    return result.mappings().one_or_none()


async def create_customer(
    db: AsyncSession, name: str, phone_number: str, address: str
) -> WriteResult:
    result = await db.execute(
        insert(customers).values(name=name, phone_number=phone_number, address=address)
    )
    return WriteResult.from_insert(result)


async def update_customer(
    db: AsyncSession, customer_id: int, name: str, phone_number: str, address: str
) -> WriteResult:
    result = await db.execute(
        update(customers)
        .where(customers.c.id == customer_id)
        .values(name=name, phone_number=phone_number, address=address)
    )
    return WriteResult.from_change(result)


async def delete_customer(db: AsyncSession, customer_id: int) -> WriteResult:
    result = await db.execute(delete(customers).where(customers.c.id == customer_id))
    return WriteResult.from_change(result)
