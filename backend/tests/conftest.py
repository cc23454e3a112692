# backend/tests/conftest.py
import os
import tempfile

# Point the app at a throwaway in-memory database and upload folder before
# anything imports config.settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="inventory-uploads-")
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOG_LEVEL"] = "WARNING"

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from database import Base, SessionLocal, engine, init_db
from main import app
from models.product import Product
from seed import seed_defaults, DEFAULT_CATEGORIES


@pytest.fixture(autouse=True)
def reset_db():
    Base.metadata.drop_all(bind=engine)
    init_db()
    session = SessionLocal()
    try:
        seed_defaults(session)
    finally:
        session.close()
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def admin_client():
    c = TestClient(app)
    resp = c.post("/auth/login", json={"username": "admin", "password": "admin"})
    assert resp.status_code == 200, resp.text
    return c


@pytest.fixture
def seeded_category_count():
    return len(DEFAULT_CATEGORIES)


@pytest.fixture
def make_product(db):
    """Insert a product row directly, bypassing SKU generation."""
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        values = dict(
            name=f"Product {counter['n']}",
            sku=f"TEST-{counter['n']:03d}",
            category="ELC",
            price=Decimal("9.99"),
            stock_quantity=20,
        )
        values.update(overrides)
        product = Product(**values)
        db.add(product)
        db.commit()
        db.refresh(product)
        return product

    return _make


@pytest.fixture
def viewer_client(db):
    from models.users import User
    from utils.hashing import get_password_hash

    db.add(User(username="viewer", password_hash=get_password_hash("viewer"), role="viewer"))
    db.commit()
    c = TestClient(app)
    resp = c.post("/auth/login", json={"username": "viewer", "password": "viewer"})
    assert resp.status_code == 200, resp.text
    return c
