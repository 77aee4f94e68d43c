"""
Product Schema
Pydantic model for a product together with its optional barcode.
"""

from pydantic import BaseModel, Field
from typing import Optional

from inventory.schemas.barcode import Barcode


class Product(BaseModel):
    """
    A product and its zero-or-one linked barcode.

    barcode is None when the product has no barcode. price and weight are
    stored as given.
    """
    id: int = Field(0, description="Identity assigned by the store (0 = not persisted)")
    name: Optional[str] = None
    brand: Optional[str] = None
    category: Optional[str] = None
    price: float = 0.0
    weight: float = 0.0
    deleted: bool = False
    barcode: Optional[Barcode] = None

    model_config = {"from_attributes": True}
