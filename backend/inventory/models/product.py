"""
Product Table Model
One row per product, with a nullable foreign key to its barcode.

The barcode link is zero-or-one: barcode_id is NULL when the product has no
barcode. Deleting a product (soft) does not touch the barcode row.
"""

from sqlalchemy import Column, Integer, String, Float, Boolean, ForeignKey

from inventory.core.constants import NAME_MAX_LENGTH
from inventory.db.base import Base


class ProductRow(Base):
    __tablename__ = "product"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(NAME_MAX_LENGTH), nullable=False, index=True)
    brand = Column(String(NAME_MAX_LENGTH), nullable=False, index=True)
    category = Column(String(NAME_MAX_LENGTH), nullable=False)
    price = Column(Float, nullable=True)
    weight = Column(Float, nullable=True)

    barcode_id = Column(
        Integer,
        ForeignKey("barcode.id"),
        nullable=True,
        index=True
    )

    # Soft delete flag
    deleted = Column(Boolean, default=False, nullable=False, index=True)

    def __repr__(self):
        return f"<ProductRow(id={self.id}, name='{self.name}', barcode_id={self.barcode_id})>"
