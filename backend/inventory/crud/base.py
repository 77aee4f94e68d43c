"""
Store Base – shared plumbing for the barcode and product stores.

Every public store call opens one session from the factory and closes it on
exit. The *_within_transaction variants take a session owned by the caller
and never commit, roll back or close it.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Generic, Iterator, Optional, TypeVar

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from inventory.core.exceptions import BackendError, GenerationError, NotFoundError
from inventory.db.base import Base
from inventory.db.session import SessionLocal
from inventory.services.error_logging import error_logger

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


@contextmanager
def backend_errors(operation: str, **context: Any) -> Iterator[None]:
    """Log SQLAlchemy failures and re-raise them as BackendError."""
    try:
        yield
    except SQLAlchemyError as e:
        error_logger.log_error(e, context={"operation": operation, **context})
        raise BackendError(f"{operation} failed: {e}", details=context) from e


class StoreBase(Generic[ModelType]):
    """Session handling, soft delete and identity read-back for one table."""

    entity_name = "Entity"

    def __init__(self, model: type[ModelType], session_factory: Optional[sessionmaker] = None):
        self.model = model
        self.session_factory = session_factory or SessionLocal

    @contextmanager
    def session_scope(self, operation: str, commit: bool = False) -> Iterator[Session]:
        """
        Open a session for a single store call.

        The session is rolled back on any failure and always closed.
        """
        db = self.session_factory()
        try:
            with backend_errors(operation):
                yield db
                if commit:
                    db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """
        Open a session spanning several *_within_transaction calls.

        Commits when the block exits normally, rolls back otherwise.
        """
        with self.session_scope("transaction", commit=True) as db:
            yield db

    def _update_active(self, db: Session, entity_id: int, values: Dict[str, Any]) -> None:
        """UPDATE a non-deleted row; NotFoundError if nothing matched."""
        stmt = (
            update(self.model)
            .where(self.model.id == entity_id, self.model.deleted == False)  # noqa: E712
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = db.execute(stmt)
        if result.rowcount == 0:
            raise NotFoundError(self.entity_name, entity_id)

    def _soft_delete(self, db: Session, entity_id: int) -> None:
        self._update_active(db, entity_id, {"deleted": True})
        logger.info(f"[{self.__class__.__name__}] Soft-deleted {self.entity_name} {entity_id}")

    def _insert_row(self, db: Session, row: ModelType) -> int:
        """Add row, flush, and return the identity generated by the database."""
        db.add(row)
        db.flush()
        if not row.id:
            raise GenerationError(f"Insert of {self.entity_name} returned no generated id")
        return row.id
