"""
Domain Exceptions

Every error raised by the stores and services derives from InventoryError,
so callers can catch the whole family with one clause.
"""

from typing import Any, List, Optional


class InventoryError(Exception):
    """Base exception for the registry."""
    def __init__(self, message: str, details: Any = None):
        self.message = message
        self.details = details
        super().__init__(self.message)


class InvalidArgumentError(InventoryError, ValueError):
    """Raised when input fails validation. Nothing has been written."""
    def __init__(self, message: str, errors: Optional[List[str]] = None):
        self.errors = list(errors) if errors else [message]
        super().__init__(message, details=self.errors)


class NotFoundError(InventoryError, LookupError):
    """Raised when an update or delete affected zero rows."""
    def __init__(self, entity: str, entity_id: Any):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} with id {entity_id} not found")


class BackendError(InventoryError):
    """Raised when the database rejects a statement or is unreachable."""


class GenerationError(InventoryError):
    """Raised when an insert returned no generated identity."""
