"""Test configuration and fixtures."""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

from decimal import Decimal
from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient
from redlock import Redlock
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from backoffice.core.dependencies import get_db
from backoffice.db import Base
from backoffice.main import app
from backoffice.models import Customer, Product


@pytest.fixture
def engine():
    """In-memory SQLite shared by every session of a test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(engine)
        engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def seeded(db_session):
    """Customer 7 and three products: P1 stock 5 @100, P2 stock 10 @250, P3 sold out."""
    customer = Customer(customer_id=7, name="Asha Verma", email="asha@example.com", phone="9876543210", address="Bengaluru")
    p1 = Product(product_id=1, product_name="Wireless Mouse", category="Electronics", price=Decimal("100.00"), stock=5)
    p2 = Product(product_id=2, product_name="Cotton T-Shirt", category="Clothing", price=Decimal("250.00"), stock=10)
    p3 = Product(product_id=3, product_name="Coffee Mug", category="Home", price=Decimal("80.00"), stock=0)
    db_session.add_all([customer, p1, p2, p3])
    db_session.commit()
    return {"customer": customer, "p1": p1, "p2": p2, "p3": p3}


@pytest.fixture
def client(session_factory, seeded):
    """TestClient whose requests use the test database."""
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def mock_redlock():
    """Redlock double that always grants the lock."""
    redlock_mock = Mock(spec=Redlock)
    redlock_mock.lock.return_value = Mock()
    redlock_mock.unlock.return_value = True
    return redlock_mock
