"""
Product Service - Business Logic Layer
Validates products, coordinates the nested barcode writes and implements the
FK-safe barcode removal.

Multi-step writes (barcode then product on insert, FK clear then barcode
delete on removal) share one session transaction: either every step is
committed or none is.
"""

import logging
from typing import List, Optional

from inventory.core.exceptions import InvalidArgumentError
from inventory.crud.product import ProductStore
from inventory.schemas.barcode import Barcode
from inventory.schemas.product import Product
from inventory.services.barcode_service import BarcodeService
from inventory.services.validation import is_blank, validate_id, validate_product

logger = logging.getLogger(__name__)


class ProductService:

    def __init__(self, store: ProductStore, barcode_service: BarcodeService):
        if store is None:
            raise ValueError("store must not be None")
        if barcode_service is None:
            raise ValueError("barcode_service must not be None")
        self.store = store
        self._barcode_service = barcode_service

    @property
    def barcode_service(self) -> BarcodeService:
        return self._barcode_service

    def _ensure_barcode_unclaimed(self, product: Product) -> None:
        """A persisted barcode may be linked to at most one non-deleted product."""
        barcode = product.barcode
        if barcode is None or barcode.id <= 0:
            return
        owner_id = self.store.linked_product_id(barcode.id, exclude_product_id=product.id)
        if owner_id is not None:
            raise InvalidArgumentError(
                f"Barcode {barcode.id} already belongs to product {owner_id}"
            )

    def insert(self, product: Product) -> Product:
        """
        Insert a product and, if present, its barcode.

        A barcode with id 0 is inserted first and its new id becomes the
        product's foreign key. A barcode that already has an id is updated in
        place, unless another product already links it. If any step fails
        nothing is committed and product and barcode get back every field
        value they had before the call.
        """
        validate_product(product).raise_if_invalid()
        self._ensure_barcode_unclaimed(product)

        barcode = product.barcode
        product_state = product.model_dump(exclude={"barcode"})
        barcode_state = barcode.model_dump() if barcode is not None else None

        try:
            with self.store.transaction() as db:
                if barcode is not None:
                    if barcode.id == 0:
                        self._barcode_service.insert_within_transaction(barcode, db)
                    else:
                        self._barcode_service.update_within_transaction(barcode, db)
                self.store.insert_within_transaction(product, db)
        except Exception:
            for field, value in product_state.items():
                setattr(product, field, value)
            if barcode is not None:
                for field, value in barcode_state.items():
                    setattr(barcode, field, value)
            raise

        logger.info(f"[ProductService] Created product {product.id} '{product.name}'")
        return product

    def update(self, product: Product) -> Product:
        """
        Update product fields and its barcode link.

        Only the foreign key is written for the barcode: barcode=None clears
        the link, the barcode row itself is left unchanged. Linking a barcode
        that another product already uses is rejected.
        """
        result = validate_product(product)
        if product is not None:
            result.merge(validate_id(product.id, "product id"))
        result.raise_if_invalid()
        self._ensure_barcode_unclaimed(product)

        self.store.update(product)
        return product

    def delete(self, product_id: int) -> None:
        """Soft-delete a product. Its barcode is not deleted."""
        validate_id(product_id, "product id").raise_if_invalid()
        self.store.soft_delete(product_id)

    def get_by_id(self, product_id: int) -> Optional[Product]:
        validate_id(product_id, "product id").raise_if_invalid()
        return self.store.get_by_id(product_id)

    def get_all(self) -> List[Product]:
        return self.store.get_all()

    def search_by_name_or_brand(self, text: str) -> List[Product]:
        if is_blank(text):
            raise InvalidArgumentError("Search text must not be blank")
        return self.store.search_by_name_or_brand(text)

    def update_product_barcode(self, product_id: int, barcode: Barcode) -> Barcode:
        """
        Update the barcode currently linked to a product.

        The barcode id is taken from the product's link, whatever barcode.id
        held before the call.
        """
        validate_id(product_id, "product id").raise_if_invalid()

        product = self.store.get_by_id(product_id)
        if product is None:
            raise InvalidArgumentError(f"Product {product_id} not found")
        if product.barcode is None:
            raise InvalidArgumentError(f"Product {product_id} has no barcode")
        if barcode is None:
            raise InvalidArgumentError("barcode must not be None")

        barcode.id = product.barcode.id
        return self._barcode_service.update(barcode)

    def remove_barcode_from_product(self, product_id: int, barcode_id: int) -> Product:
        """
        Unlink a barcode from its product, then soft-delete it.

        Steps:
        1. Both ids must be positive
        2. The product must exist
        3. The product's barcode must be barcode_id (ownership check)
        4. Clear the product's foreign key
        5. Soft-delete the barcode

        Steps 4 and 5 run in one transaction. Checks 1-3 fail with
        InvalidArgumentError before anything is written.
        """
        validate_id(product_id, "product id").merge(
            validate_id(barcode_id, "barcode id")
        ).raise_if_invalid()

        product = self.store.get_by_id(product_id)
        if product is None:
            raise InvalidArgumentError(f"Product {product_id} not found")

        if product.barcode is None or product.barcode.id != barcode_id:
            raise InvalidArgumentError(
                f"Barcode {barcode_id} does not belong to product {product_id}"
            )

        product.barcode = None
        with self.store.transaction() as db:
            self.store.update_within_transaction(product, db)
            self._barcode_service.delete_within_transaction(barcode_id, db)

        logger.info(f"[ProductService] Removed barcode {barcode_id} from product {product_id}")
        return product
