"""
Barcode Service - Business Logic Layer
Validates barcodes before handing them to the BarcodeStore.
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from inventory.core.exceptions import InvalidArgumentError
from inventory.crud.barcode import BarcodeStore
from inventory.schemas.barcode import Barcode
from inventory.services.validation import (
    is_blank,
    normalize_barcode_type,
    validate_barcode,
    validate_id,
)

logger = logging.getLogger(__name__)


class BarcodeService:

    def __init__(self, store: BarcodeStore):
        if store is None:
            raise ValueError("store must not be None")
        self.store = store

    @staticmethod
    def prepare(barcode: Barcode, require_id: bool = False) -> None:
        """
        Validate barcode, then upper-case its type and strip its value in place.

        Raises:
            InvalidArgumentError: listing every failed check
        """
        result = validate_barcode(barcode)
        if require_id and barcode is not None:
            result.merge(validate_id(barcode.id, "barcode id"))
        result.raise_if_invalid()
        barcode.type = normalize_barcode_type(barcode.type)
        barcode.value = barcode.value.strip()

    def insert(self, barcode: Barcode) -> Barcode:
        self.prepare(barcode)
        self.store.insert(barcode)
        return barcode

    def insert_within_transaction(self, barcode: Barcode, db: Session) -> Barcode:
        self.prepare(barcode)
        self.store.insert_within_transaction(barcode, db)
        return barcode

    def update(self, barcode: Barcode) -> Barcode:
        self.prepare(barcode, require_id=True)
        self.store.update(barcode)
        return barcode

    def update_within_transaction(self, barcode: Barcode, db: Session) -> Barcode:
        self.prepare(barcode, require_id=True)
        self.store.update_within_transaction(barcode, db)
        return barcode

    def delete(self, barcode_id: int) -> None:
        """
        Soft-delete a barcode directly.

        Products pointing at this barcode keep their foreign key, which then
        references a deleted row. Use ProductService.remove_barcode_from_product
        to clear the link first.
        """
        validate_id(barcode_id, "barcode id").raise_if_invalid()
        self.store.soft_delete(barcode_id)
        logger.warning(f"[BarcodeService] Barcode {barcode_id} deleted directly; referencing products were not updated")

    def delete_within_transaction(self, barcode_id: int, db: Session) -> None:
        validate_id(barcode_id, "barcode id").raise_if_invalid()
        self.store.soft_delete_within_transaction(barcode_id, db)

    def get_by_id(self, barcode_id: int) -> Optional[Barcode]:
        validate_id(barcode_id, "barcode id").raise_if_invalid()
        return self.store.get_by_id(barcode_id)

    def get_all(self) -> List[Barcode]:
        return self.store.get_all()

    def find_by_value(self, value: str) -> Optional[Barcode]:
        if is_blank(value):
            raise InvalidArgumentError("Barcode value must not be blank")
        return self.store.find_by_value(value.strip())
