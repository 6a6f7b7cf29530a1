"""
Laundry API Backend: ORM Models
=================================

What:  SQLAlchemy table definitions for the four stored entities.
Why:   Importing this package registers every table on Base.metadata,
       which create_schema() relies on.
"""

from laundryapi.models.customer import Customer
from laundryapi.models.product import Product
from laundryapi.models.transaction import Transaction
from laundryapi.models.user import OWNER_ID, Role, User

__all__ = ["Customer", "OWNER_ID", "Product", "Role", "Transaction", "User"]
