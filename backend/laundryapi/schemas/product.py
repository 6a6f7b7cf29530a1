"""Request and response models for products."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from laundryapi.schemas.common import CamelModel


class ProductRequest(CamelModel):
    """Body of POST /products and PUT /products/{id}."""

    name: str = Field(min_length=1, max_length=100)
    price: float = Field(gt=0, description="Unit price, strictly positive")
    type: str = Field(min_length=1, max_length=50, description="Category, e.g. 'kiloan'")


class ProductOut(CamelModel):
    id: int
    name: str
    price: float
    type: str
    created_at: Optional[datetime] = None
