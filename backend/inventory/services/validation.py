"""
Entity Validation

Pure functions that check a Barcode or Product and report every problem
found, without touching the database or raising. Services call them once
at their boundary and turn a failed result into InvalidArgumentError.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from inventory.core.constants import VALID_BARCODE_TYPES
from inventory.core.exceptions import InvalidArgumentError
from inventory.schemas.barcode import Barcode
from inventory.schemas.product import Product


@dataclass
class ValidationResult:
    """Outcome of validating one entity"""
    entity: str
    errors: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def add(self, message: str) -> None:
        self.errors.append(message)

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        self.errors.extend(other.errors)
        return self

    def raise_if_invalid(self) -> None:
        if self.errors:
            raise InvalidArgumentError(
                f"Invalid {self.entity}: " + "; ".join(self.errors),
                errors=self.errors,
            )


def is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def normalize_barcode_type(raw: Optional[str]) -> Optional[str]:
    """'ean13 ' -> 'EAN13'. Blank input gives None."""
    if is_blank(raw):
        return None
    return raw.strip().upper()


def validate_barcode(barcode: Optional[Barcode]) -> ValidationResult:
    result = ValidationResult(entity="barcode")
    if barcode is None:
        result.add("barcode must not be None")
        return result

    barcode_type = normalize_barcode_type(barcode.type)
    if barcode_type is None:
        result.add("type is required")
    elif barcode_type not in VALID_BARCODE_TYPES:
        result.add(f"type must be one of {', '.join(VALID_BARCODE_TYPES)} (got '{barcode.type}')")

    if is_blank(barcode.value):
        result.add("value is required")

    return result


def validate_product(product: Optional[Product]) -> ValidationResult:
    """
    Check name, brand and category.

    price and weight are accepted as given, including zero and negative
    values. The linked barcode, if any, is validated on its own.
    """
    result = ValidationResult(entity="product")
    if product is None:
        result.add("product must not be None")
        return result

    for field_name in ("name", "brand", "category"):
        if is_blank(getattr(product, field_name)):
            result.add(f"{field_name} is required")

    return result


def validate_id(entity_id: int, label: str = "id") -> ValidationResult:
    result = ValidationResult(entity=label)
    if entity_id is None or entity_id <= 0:
        result.add(f"{label} must be greater than 0")
    return result
