"""
Laundry API Backend: Transaction SQLAlchemy Model
===================================================

What:  ORM model representing the `transactions` table.
Why:   Records one sale: who served it, for which customer, which product,
       how many units, and the total charged.

Table Design Rationale:
    - Foreign keys to users, customers and products are enforced by SQLite
      (PRAGMA foreign_keys=ON in database.py). An unknown customer id on
      insert therefore fails in the store and is reported as a 404.
    - ON DELETE RESTRICT (the default): a product, customer or user that
      appears in a transaction cannot be deleted out from under it.
    - total_price is stored, not derived: it is unit price x quantity at
      the moment of sale and is never recomputed when the price changes.
    - Rows are immutable; the API exposes no update or delete.
"""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Float, ForeignKey, Integer, func
from sqlalchemy.orm import Mapped, mapped_column

from laundryapi.database import Base


class Transaction(Base):
    __tablename__ = "transactions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    customer_id: Mapped[int] = mapped_column(ForeignKey("customers.id"), nullable=False)
    product_id: Mapped[int] = mapped_column(ForeignKey("products.id"), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    total_price: Mapped[float] = mapped_column(Float, nullable=False)
    transaction_date: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.current_timestamp(),
    )

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_transactions_quantity_positive"),
    )

    def __repr__(self) -> str:
        return (
            f"<Transaction(id={self.id}, customer_id={self.customer_id}, "
            f"product_id={self.product_id}, total_price={self.total_price})>"
        )
