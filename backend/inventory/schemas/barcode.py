"""
Barcode Schema
Pydantic model carried between services and stores.
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import date


class Barcode(BaseModel):
    """
    A barcode as seen by callers.

    id is 0 until the store assigns one on insert. Field contents are not
    checked here: validation happens once at the service boundary so that
    every failure is reported together.
    """
    id: int = Field(0, description="Identity assigned by the store (0 = not persisted)")
    type: Optional[str] = Field(None, description="EAN8, EAN13 or UPC")
    value: Optional[str] = Field(None, description="Encoded digits")
    assigned_on: Optional[date] = Field(None, description="Date the barcode was assigned")
    notes: Optional[str] = None
    deleted: bool = False

    model_config = {"from_attributes": True}
