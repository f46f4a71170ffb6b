from contextlib import contextmanager
from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from pricecompare.data.database import Base
from pricecompare.data.models import DocumentModel  # noqa: F401
from pricecompare.domain.schemas import Catalog, Offer, Product, Store
from pricecompare.services.catalog_service import load_catalog_file
from pricecompare.utils.settings import CATALOG_PATH


class FakeLockService:
    """Records which keys were locked; names in `busy` refuse the lock."""

    def __init__(self):
        self.held = []
        self.busy = set()

    @contextmanager
    def hold(self, name):
        if name in self.busy:
            raise RuntimeError(f"Concurrent modification of {name}, try again")
        self.held.append(name)
        yield


class FakeNotifier:
    def __init__(self):
        self.placed = []
        self.status_changes = []

    def send_order_placed(self, order_id, customer, store_name):
        self.placed.append((order_id, customer, store_name))

    def send_status_changed(self, order_id, customer, status):
        self.status_changes.append((order_id, customer, status))


def make_product(product_id, name, pricing):
    return Product(
        id=product_id,
        name=name,
        category="Gadgets",
        brand="Acme",
        description=f"{name} description",
        specs=[f"{name} spec"],
        pricing={
            store_id: Offer(price=Decimal(price), available=available)
            for store_id, (price, available) in pricing.items()
        },
    )


@pytest.fixture
def small_catalog():
    stores = [
        Store(id="a", name="Store A", delivery_fee=Decimal("3.99"), eta_label="2-4 days", rating=4.5),
        Store(id="b", name="Store B", delivery_fee=Decimal("2.49"), eta_label="Next day", rating=4.0),
        Store(id="c", name="Store C", delivery_fee=Decimal("4.00"), eta_label="3-5 days", rating=4.8),
    ]
    products = [
        make_product("p", "P", {"a": ("10.00", True), "b": ("9.00", False), "c": ("5.00", True)}),
        make_product("q", "Q", {"a": ("25.00", True), "c": ("20.00", True)}),
    ]
    return Catalog(stores=stores, products=products)


@pytest.fixture
def catalog():
    return load_catalog_file(CATALOG_PATH)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def locks():
    return FakeLockService()


@pytest.fixture
def notifier():
    return FakeNotifier()
