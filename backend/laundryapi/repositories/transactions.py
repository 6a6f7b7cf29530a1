"""
Laundry API Backend: Transactions Repository
==============================================

What:  Reads and inserts on the `transactions` table.
How:   Reads go through one four-way join (transactions ⋈ users ⋈
       customers ⋈ products) so that list and detail share the same
       denormalized row shape:

           user_id, user_name, user_email, user_role,
           customer_id, customer_name, customer_phone, customer_address,
           product_id, product_name, product_price, product_type,
           transaction_id, transaction_quantity, transaction_total_price,
           transaction_date

There is no update or delete: transactions are immutable once recorded.
"""

from typing import List, Optional

from sqlalchemy import Select, insert, select
from sqlalchemy.engine import RowMapping
from sqlalchemy.ext.asyncio import AsyncSession

from laundryapi.models.customer import Customer
from laundryapi.models.product import Product
from laundryapi.models.transaction import Transaction
from laundryapi.models.user import User
from laundryapi.repositories.base import WriteResult

transactions = Transaction.__table__
users = User.__table__
customers = Customer.__table__
products = Product.__table__


def _denormalized_view() -> Select:
    return (
        select(
            users.c.id.label("user_id"),
            users.c.name.label("user_name"),
            users.c.email.label("user_email"),
            users.c.role.label("user_role"),
            customers.c.id.label("customer_id"),
            customers.c.name.label("customer_name"),
            customers.c.phone_number.label("customer_phone"),
            customers.c.address.label("customer_address"),
            transactions.c.id.label("transaction_id"),
            transactions.c.quantity.label("transaction_quantity"),
            transactions.c.total_price.label("transaction_total_price"),
            transactions.c.transaction_date.label("transaction_date"),
            products.c.id.label("product_id"),
            products.c.name.label("product_name"),
            products.c.price.label("product_price"),
            products.c.type.label("product_type"),
        )
        .select_from(transactions)
        .join(customers, transactions.c.customer_id == customers.c.id)
        .join(products, transactions.c.product_id == products.c.id)
        .join(users, transactions.c.user_id == users.c.id)
    )


async def list_transactions(db: AsyncSession) -> List[RowMapping]:
    result = await db.execute(_denormalized_view().order_by(transactions.c.id))
    return list(result.mappings().all())


async def get_transaction_by_id(db: AsyncSession, transaction_id: int) -> Optional[RowMapping]:
    result = await db.execute(_denormalized_view().where(transactions.c.id == transaction_id))
    return result.mappings().one_or_none()


async def create_transaction(
    db: AsyncSession,
    user_id: int,
    customer_id: int,
    product_id: int,
    quantity: int,
    total_price: float,
) -> WriteResult:
    result = await db.execute(
        insert(transactions).values(
            user_id=user_id,
            customer_id=customer_id,
            product_id=product_id,
            quantity=quantity,
            total_price=total_price,
        )
    )
    return WriteResult.from_insert(result)
