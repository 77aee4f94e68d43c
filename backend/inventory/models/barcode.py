"""
Barcode Table Model
One row per barcode. Rows are never physically deleted: the deleted flag
hides them from every read.
"""

from sqlalchemy import Column, Integer, String, Text, Date, Boolean

from inventory.core.constants import BARCODE_TYPE_MAX_LENGTH, BARCODE_VALUE_MAX_LENGTH
from inventory.db.base import Base


class BarcodeRow(Base):
    __tablename__ = "barcode"

    id = Column(Integer, primary_key=True, autoincrement=True)
    type = Column(String(BARCODE_TYPE_MAX_LENGTH), nullable=False)  # EAN8, EAN13, UPC
    value = Column(String(BARCODE_VALUE_MAX_LENGTH), nullable=False, index=True)
    assigned_on = Column(Date, nullable=True)
    notes = Column(Text, nullable=True)

    # Soft delete flag
    deleted = Column(Boolean, default=False, nullable=False, index=True)

    def __repr__(self):
        return f"<BarcodeRow(id={self.id}, type={self.type}, value='{self.value}')>"
