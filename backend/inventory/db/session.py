"""
Database Session Management
Creates and manages SQLAlchemy database engine and session factory.

Stores receive a session factory at construction time and open one session
per call. The module-level SessionLocal is the default factory; tests bind
their own factory to an in-memory engine.
"""

import logging

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from inventory.core.config import settings
from inventory.db.base import Base

logger = logging.getLogger(__name__)


# Configuration:
# - echo=settings.DEBUG: Log all SQL queries when debug mode is enabled
# - pool_pre_ping=True: Verify connections before using them
# - pool_recycle=3600: Recycle connections after 1 hour
engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    pool_pre_ping=True,
    pool_recycle=3600,
)

# Explicit commit() and flush() calls only
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)


def init_db(bind: Engine = None) -> None:
    """Create the barcode and product tables if they don't exist."""
    # Import models so they are registered on Base.metadata
    import inventory.models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
    logger.info("[DB] Tables created/verified")


def check_connection(bind: Engine = None) -> bool:
    """
    Probe the database with SELECT 1.

    Returns:
        True if the database answered, False otherwise
    """
    try:
        with (bind or engine).connect() as conn:
            conn.execute(text("SELECT 1"))
        logger.info("[DB] Connection OK")
        return True
    except SQLAlchemyError as e:
        logger.error(f"[DB] Connection failed: {e}")
        return False
