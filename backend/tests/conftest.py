import os

# Must be set before inventory.core.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import date

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from inventory.crud.barcode import BarcodeStore
from inventory.crud.product import ProductStore
from inventory.db.session import init_db
from inventory.deps import get_product_service
from inventory.schemas.barcode import Barcode
from inventory.schemas.product import Product


def make_barcode(**overrides) -> Barcode:
    defaults = dict(
        type="EAN13",
        value="7791234567890",
        assigned_on=date(2024, 3, 15),
        notes="shelf label",
    )
    defaults.update(overrides)
    return Barcode(**defaults)


def make_product(**overrides) -> Product:
    defaults = dict(
        name="Red Apple Juice",
        brand="Orchard",
        category="Beverages",
        price=2.5,
        weight=1.0,
    )
    defaults.update(overrides)
    return Product(**defaults)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        dbapi_connection.execute("PRAGMA foreign_keys=ON")

    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def barcode_store(session_factory):
    return BarcodeStore(session_factory)


@pytest.fixture
def product_store(barcode_store):
    return ProductStore(barcode_store)


@pytest.fixture
def product_service(session_factory):
    return get_product_service(session_factory)


@pytest.fixture
def barcode_service(product_service):
    return product_service.barcode_service
