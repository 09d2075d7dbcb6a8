"""
Shared fixtures: SQLite in-memory database, catalog double, in-process lock
and a FastAPI TestClient wired to all of them.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOCK_BACKEND"] = "memory"

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import shopcart.data.models  # noqa: F401
from shopcart.api import create_app
from shopcart.data.database import Base, get_db
from shopcart.data.models import UserModel
from shopcart.domain.product import ProductSnapshot
from shopcart.services.cart_service import CartService
from shopcart.services.lock_service import InProcessLockService
from shopcart.utils.settings import DEFAULT_ADDRESS

SHIPPING_ADDRESS = "221B Baker Street, London NW1 6XE"


class FakeCatalog:
    """Dictionary-backed product catalog with the same find_by_id contract as ProductClient."""

    def __init__(self, products):
        self.products = {p.id: p for p in products}

    def find_by_id(self, product_id):
        return self.products.get(product_id)

    def reprice(self, product_id, cost):
        old = self.products[product_id]
        self.products[product_id] = ProductSnapshot(
            id=old.id, name=old.name, cost=Decimal(cost), category=old.category
        )


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def catalog():
    return FakeCatalog([
        ProductSnapshot(id="prodX", name="YONEX Smash Badminton Racquet", cost=Decimal("100"), category="Sports"),
        ProductSnapshot(id="prodY", name="UNIFACTOR Mens Running Shoes", cost=Decimal("50"), category="Fashion"),
        ProductSnapshot(id="prodZ", name="Tan Leatherette Weekender Duffle", cost=Decimal("25"), category="Fashion"),
    ])


@pytest.fixture
def lock_service():
    return InProcessLockService(wait=1)


@pytest.fixture
def cart_service(db_session, catalog, lock_service):
    return CartService(db=db_session, product_catalog=catalog, lock_service=lock_service)


def make_user(db_session, email="buyer@example.com", wallet="500", address=DEFAULT_ADDRESS):
    user = UserModel(name="buyer", email=email, wallet_money=Decimal(wallet), address=address)
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def user(db_session):
    """User with the default (unset) address."""
    return make_user(db_session)


@pytest.fixture
def shopper(db_session):
    """User with a shipping address set and 500 in the wallet."""
    return make_user(db_session, email="shopper@example.com", address=SHIPPING_ADDRESS)


@pytest.fixture
def test_client(session_factory, catalog, lock_service):
    app = create_app(product_catalog=catalog, lock_service=lock_service)

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as client:
        yield client
