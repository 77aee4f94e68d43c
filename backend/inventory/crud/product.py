"""
Product Store
CRUD and soft delete for the product table, with the linked barcode
eager-loaded through a LEFT OUTER JOIN on every read.

The join yields one flat row per product. Whether that row carries a
barcode is decided in exactly one place, _has_linked_barcode(): an outer
join with no match fills every barcode column with NULL, so only a non-null,
positive joined id means a barcode is present.
"""

import logging
from typing import List, Optional

from sqlalchemy import and_, or_, select
from sqlalchemy.engine import Row
from sqlalchemy.orm import Session, sessionmaker

from inventory.core.exceptions import InvalidArgumentError
from inventory.crud.barcode import BarcodeStore
from inventory.crud.base import StoreBase, backend_errors
from inventory.models.barcode import BarcodeRow
from inventory.models.product import ProductRow
from inventory.schemas.barcode import Barcode
from inventory.schemas.product import Product

logger = logging.getLogger(__name__)


def _barcode_fk(barcode: Optional[Barcode]) -> Optional[int]:
    """FK value for a product: the barcode id when persisted, else NULL."""
    if barcode is not None and barcode.id > 0:
        return barcode.id
    return None


def _has_linked_barcode(row: Row) -> bool:
    return row.linked_barcode_id is not None and row.linked_barcode_id > 0


class ProductStore(StoreBase[ProductRow]):

    entity_name = "Product"

    def __init__(self, barcode_store: BarcodeStore, session_factory: Optional[sessionmaker] = None):
        if barcode_store is None:
            raise ValueError("barcode_store must not be None")
        super().__init__(ProductRow, session_factory or barcode_store.session_factory)
        self.barcode_store = barcode_store

    # ── Row mapping ──────────────────────────────────────────────────────────

    @staticmethod
    def _joined_select():
        """
        Products LEFT JOIN their barcode, non-deleted products only.

        The deleted filter on the barcode side sits in the ON clause, so a
        product whose barcode was soft-deleted directly still comes back, just
        without a barcode.
        """
        return (
            select(
                ProductRow.id,
                ProductRow.name,
                ProductRow.brand,
                ProductRow.category,
                ProductRow.price,
                ProductRow.weight,
                ProductRow.deleted,
                BarcodeRow.id.label("linked_barcode_id"),
                BarcodeRow.type.label("linked_barcode_type"),
                BarcodeRow.value.label("linked_barcode_value"),
                BarcodeRow.assigned_on.label("linked_barcode_assigned_on"),
                BarcodeRow.notes.label("linked_barcode_notes"),
            )
            .select_from(ProductRow)
            .outerjoin(
                BarcodeRow,
                and_(
                    ProductRow.barcode_id == BarcodeRow.id,
                    BarcodeRow.deleted == False  # noqa: E712
                )
            )
            .where(ProductRow.deleted == False)  # noqa: E712
        )

    @staticmethod
    def _to_schema(row: Row) -> Product:
        barcode = None
        if _has_linked_barcode(row):
            barcode = Barcode(
                id=row.linked_barcode_id,
                type=row.linked_barcode_type,
                value=row.linked_barcode_value,
                assigned_on=row.linked_barcode_assigned_on,
                notes=row.linked_barcode_notes,
                deleted=False,
            )

        return Product(
            id=row.id,
            name=row.name,
            brand=row.brand,
            category=row.category,
            price=row.price if row.price is not None else 0.0,
            weight=row.weight if row.weight is not None else 0.0,
            deleted=row.deleted,
            barcode=barcode,
        )

    @staticmethod
    def _values(product: Product) -> dict:
        return {
            "name": product.name,
            "brand": product.brand,
            "category": product.category,
            "price": product.price,
            "weight": product.weight,
            "barcode_id": _barcode_fk(product.barcode),
        }

    # ── Writes ───────────────────────────────────────────────────────────────

    def insert(self, product: Product) -> None:
        """
        Insert product and set product.id to the generated identity.

        The barcode itself is not written here; only its id is stored as FK.
        """
        with self.session_scope("product.insert", commit=True) as db:
            self.insert_within_transaction(product, db)

    def insert_within_transaction(self, product: Product, db: Session) -> None:
        with backend_errors("product.insert"):
            row = ProductRow(**self._values(product), deleted=False)
            product.id = self._insert_row(db, row)
            product.deleted = False
        logger.info(
            f"[ProductStore] Inserted product {product.id} '{product.name}' "
            f"(barcode_id={_barcode_fk(product.barcode)})"
        )

    def update(self, product: Product) -> None:
        """Raises NotFoundError if the product is absent or deleted."""
        with self.session_scope("product.update", commit=True) as db:
            self.update_within_transaction(product, db)

    def update_within_transaction(self, product: Product, db: Session) -> None:
        with backend_errors("product.update", product_id=product.id):
            self._update_active(db, product.id, self._values(product))

    def soft_delete(self, product_id: int) -> None:
        """Raises NotFoundError if the product is absent or already deleted."""
        with self.session_scope("product.soft_delete", commit=True) as db:
            self.soft_delete_within_transaction(product_id, db)

    def soft_delete_within_transaction(self, product_id: int, db: Session) -> None:
        with backend_errors("product.soft_delete", product_id=product_id):
            self._soft_delete(db, product_id)

    # ── Reads ────────────────────────────────────────────────────────────────

    def get_by_id(self, product_id: int) -> Optional[Product]:
        with self.session_scope("product.get_by_id") as db:
            row = db.execute(
                self._joined_select().where(ProductRow.id == product_id)
            ).first()
            return self._to_schema(row) if row else None

    def get_all(self) -> List[Product]:
        with self.session_scope("product.get_all") as db:
            rows = db.execute(
                self._joined_select().order_by(ProductRow.id.asc())
            ).all()
            return [self._to_schema(row) for row in rows]

    def linked_product_id(self, barcode_id: int, exclude_product_id: Optional[int] = None) -> Optional[int]:
        """Id of a non-deleted product whose foreign key points at barcode_id."""
        with self.session_scope("product.linked_product_id") as db:
            stmt = select(ProductRow.id).where(
                ProductRow.barcode_id == barcode_id,
                ProductRow.deleted == False  # noqa: E712
            )
            if exclude_product_id:
                stmt = stmt.where(ProductRow.id != exclude_product_id)
            return db.execute(
                stmt.order_by(ProductRow.id.asc()).limit(1)
            ).scalar_one_or_none()

    def search_by_name_or_brand(self, pattern: str) -> List[Product]:
        """
        Products whose name or brand contains pattern, case-sensitively.

        LIKE is case-insensitive on SQLite and on MySQL's default collations,
        so it only narrows the candidates; the exact match is applied here.
        """
        if pattern is None or not pattern.strip():
            raise InvalidArgumentError("Search pattern must not be blank")

        with self.session_scope("product.search") as db:
            rows = db.execute(
                self._joined_select()
                .where(
                    or_(
                        ProductRow.name.contains(pattern, autoescape=True),
                        ProductRow.brand.contains(pattern, autoescape=True),
                    )
                )
                .order_by(ProductRow.id.asc())
            ).all()

        return [
            self._to_schema(row)
            for row in rows
            if pattern in (row.name or "") or pattern in (row.brand or "")
        ]
