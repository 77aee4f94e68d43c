"""
Barcode Store
CRUD and soft delete for the barcode table.
"""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, sessionmaker

from inventory.crud.base import StoreBase, backend_errors
from inventory.models.barcode import BarcodeRow
from inventory.schemas.barcode import Barcode

logger = logging.getLogger(__name__)


class BarcodeStore(StoreBase[BarcodeRow]):

    entity_name = "Barcode"

    def __init__(self, session_factory: Optional[sessionmaker] = None):
        super().__init__(BarcodeRow, session_factory)

    @staticmethod
    def _to_schema(row: BarcodeRow) -> Barcode:
        return Barcode.model_validate(row)

    @staticmethod
    def _values(barcode: Barcode) -> dict:
        return {
            "type": barcode.type,
            "value": barcode.value,
            "assigned_on": barcode.assigned_on,
            "notes": barcode.notes,
        }

    def insert(self, barcode: Barcode) -> None:
        """Insert barcode and set barcode.id to the generated identity."""
        with self.session_scope("barcode.insert", commit=True) as db:
            self.insert_within_transaction(barcode, db)

    def insert_within_transaction(self, barcode: Barcode, db: Session) -> None:
        with backend_errors("barcode.insert"):
            row = BarcodeRow(**self._values(barcode), deleted=False)
            barcode.id = self._insert_row(db, row)
            barcode.deleted = False
        logger.info(f"[BarcodeStore] Inserted barcode {barcode.id} ({barcode.type} {barcode.value})")

    def update(self, barcode: Barcode) -> None:
        """Raises NotFoundError if the barcode is absent or deleted."""
        with self.session_scope("barcode.update", commit=True) as db:
            self.update_within_transaction(barcode, db)

    def update_within_transaction(self, barcode: Barcode, db: Session) -> None:
        with backend_errors("barcode.update", barcode_id=barcode.id):
            self._update_active(db, barcode.id, self._values(barcode))

    def soft_delete(self, barcode_id: int) -> None:
        """Raises NotFoundError if the barcode is absent or already deleted."""
        with self.session_scope("barcode.soft_delete", commit=True) as db:
            self.soft_delete_within_transaction(barcode_id, db)

    def soft_delete_within_transaction(self, barcode_id: int, db: Session) -> None:
        with backend_errors("barcode.soft_delete", barcode_id=barcode_id):
            self._soft_delete(db, barcode_id)

    def get_by_id(self, barcode_id: int) -> Optional[Barcode]:
        with self.session_scope("barcode.get_by_id") as db:
            row = db.execute(
                select(BarcodeRow).where(
                    BarcodeRow.id == barcode_id,
                    BarcodeRow.deleted == False  # noqa: E712
                )
            ).scalar_one_or_none()
            return self._to_schema(row) if row else None

    def get_all(self) -> List[Barcode]:
        with self.session_scope("barcode.get_all") as db:
            rows = db.execute(
                select(BarcodeRow)
                .where(BarcodeRow.deleted == False)  # noqa: E712
                .order_by(BarcodeRow.id.asc())
            ).scalars().all()
            return [self._to_schema(row) for row in rows]

    def find_by_value(self, value: str) -> Optional[Barcode]:
        """Exact match on value; the lowest id wins if several rows share it."""
        with self.session_scope("barcode.find_by_value") as db:
            row = db.execute(
                select(BarcodeRow)
                .where(
                    BarcodeRow.value == value,
                    BarcodeRow.deleted == False  # noqa: E712
                )
                .order_by(BarcodeRow.id.asc())
                .limit(1)
            ).scalar_one_or_none()
            return self._to_schema(row) if row else None
