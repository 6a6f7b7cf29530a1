"""
Laundry API Backend: Transaction Schemas
==========================================

What:  The create body and the nested transaction view.
How:   TransactionOut.from_row() regroups one flat row of the four-way join
       (see repositories/transactions.py) into:

           {
             "id": 7,
             "transcDate": "2024-05-01T09:30:00",
             "customer": {"id", "name", "phoneNumber", "address"},
             "admin":    {"id", "name", "email", "role"},
             "transcDetail": {
               "product": {"id", "name", "price", "type"},
               "qty": 3,
               "totalPrice": 30.0
             }
           }

    "admin" is the staff member who recorded the sale, whatever their role.
"""

from datetime import datetime
from typing import Any, Mapping, Optional

from pydantic import Field

from laundryapi.schemas.common import CamelModel


class TransactionCreateRequest(CamelModel):
    """Body of POST /transactions: {"customerId", "productId", "qty"}."""

    customer_id: int = Field(gt=0)
    product_id: int = Field(gt=0)
    qty: int = Field(gt=0, description="Quantity sold, positive integer")


class TransactionCustomer(CamelModel):
    id: int
    name: str
    phone_number: str
    address: str


class TransactionStaff(CamelModel):
    id: int
    name: str
    email: str
    role: str


class TransactionProduct(CamelModel):
    id: int
    name: str
    price: float
    type: str


class TransactionDetail(CamelModel):
    product: TransactionProduct
    qty: int
    total_price: float


class TransactionOut(CamelModel):
    id: int
    transc_date: Optional[datetime] = None
    customer: TransactionCustomer
    admin: TransactionStaff
    transc_detail: TransactionDetail

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "TransactionOut":
        """Project one denormalized join row into the nested view."""
        return cls(
            id=row["transaction_id"],
            transc_date=row["transaction_date"],
            customer=TransactionCustomer(
                id=row["customer_id"],
                name=row["customer_name"],
                phone_number=row["customer_phone"],
                address=row["customer_address"],
            ),
            admin=TransactionStaff(
                id=row["user_id"],
                name=row["user_name"],
                email=row["user_email"],
                role=row["user_role"],
            ),
            transc_detail=TransactionDetail(
                product=TransactionProduct(
                    id=row["product_id"],
                    name=row["product_name"],
                    price=row["product_price"],
                    type=row["product_type"],
                ),
                qty=row["transaction_quantity"],
                total_price=row["transaction_total_price"],
            ),
        )
