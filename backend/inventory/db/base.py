"""
SQLAlchemy Declarative Base
Defines the base class for all table models.

All table models (BarcodeRow, ProductRow) inherit from this base.
SQLAlchemy uses it to track the tables and create them.
"""

from sqlalchemy.orm import declarative_base

Base = declarative_base()
