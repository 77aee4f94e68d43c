"""
Database Models Module
Contains SQLAlchemy table models.

All models must be imported here to be registered with SQLAlchemy
and created during Base.metadata.create_all().
"""

from inventory.db.base import Base
from inventory.models.barcode import BarcodeRow
from inventory.models.product import ProductRow

__all__ = [
    "Base",
    "BarcodeRow",
    "ProductRow",
]
