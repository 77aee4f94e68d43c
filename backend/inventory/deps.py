"""
Service Dependencies
Wires stores and services together for the presentation layer.

Both stores share one session factory so that a ProductService transaction
also covers the barcode writes made through the BarcodeService.
"""

from typing import Optional

from sqlalchemy.orm import sessionmaker

from inventory.crud.barcode import BarcodeStore
from inventory.crud.product import ProductStore
from inventory.db.session import SessionLocal
from inventory.services.barcode_service import BarcodeService
from inventory.services.product_service import ProductService


def get_barcode_service(session_factory: Optional[sessionmaker] = None) -> BarcodeService:
    return BarcodeService(BarcodeStore(session_factory or SessionLocal))


def get_product_service(session_factory: Optional[sessionmaker] = None) -> ProductService:
    """
    Build a ProductService and its nested BarcodeService.

    Args:
        session_factory: sessionmaker to use (defaults to SessionLocal)

    Returns:
        ProductService whose barcode_service property exposes the
        BarcodeService built alongside it
    """
    barcode_store = BarcodeStore(session_factory or SessionLocal)
    product_store = ProductStore(barcode_store)
    return ProductService(product_store, BarcodeService(barcode_store))
