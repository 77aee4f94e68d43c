"""
Pydantic Schemas Module
Contains the entity models passed between services and stores.
"""

from inventory.schemas.barcode import Barcode
from inventory.schemas.product import Product

__all__ = [
    "Barcode",
    "Product",
]
