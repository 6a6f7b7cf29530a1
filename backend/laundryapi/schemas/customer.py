"""Request and response models for customers."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from laundryapi.schemas.common import CamelModel


class CustomerRequest(CamelModel):
    """Body of POST /customers and PUT /customers/{id} (phoneNumber in JSON)."""

    name: str = Field(min_length=1, max_length=100)
    phone_number: str = Field(min_length=1, max_length=30)
    address: str = Field(min_length=1)


class CustomerOut(CamelModel):
    id: int
    name: str
    phone_number: str
    address: str
    created_at: Optional[datetime] = None
