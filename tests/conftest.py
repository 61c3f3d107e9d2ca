"""Pytest configuration and fixtures."""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["PAYMENT_PROVIDER"] = "local_stub"
os.environ["LOG_FORMAT"] = "text"

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from techelevate.db import Base, get_db, enable_sqlite_foreign_keys
from techelevate.main import app
from techelevate.models import Product, ProductStatus, User, UserRole
from techelevate.services.auth import create_access_token

# Use in-memory SQLite for tests
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_foreign_keys(engine)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_engine():
    return engine


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database session for each test."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with overridden database dependency."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    test_client = TestClient(app)
    yield test_client
    app.dependency_overrides.clear()


def auth_headers(email: str) -> dict:
    """Bearer header for a principal."""
    return {"Authorization": f"Bearer {create_access_token(email)}"}


@pytest.fixture(scope="function")
def make_user(db_session):
    """Factory for user records."""
    def _make_user(
        email: str,
        name: str = "Test User",
        role: UserRole = UserRole.USER,
        is_subscribed: bool = False,
    ) -> User:
        user = User(
            email=email,
            name=name,
            role=role.value,
            is_subscribed=is_subscribed,
            subscription_date=datetime.now(timezone.utc) if is_subscribed else None,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture(scope="function")
def make_product(db_session):
    """Factory for products inserted directly, bypassing the quota gate."""
    counter = {"n": 0}
    base_time = datetime(2026, 1, 1, tzinfo=timezone.utc)

    def _make_product(
        owner_email: str,
        name: str = None,
        status: ProductStatus = ProductStatus.PENDING,
        tags: list = None,
        is_featured: bool = False,
    ) -> Product:
        counter["n"] += 1
        product = Product(
            owner_email=owner_email,
            product_name=name or f"Product {counter['n']}",
            tags=tags or [],
            status=status.value,
            is_featured=is_featured,
            upvotes=0,
            reports=0,
            created_at=base_time + timedelta(minutes=counter["n"]),
        )
        db_session.add(product)
        db_session.commit()
        db_session.refresh(product)
        return product

    return _make_product


@pytest.fixture(scope="function")
def alice(make_user):
    return make_user("alice@x.com", name="Alice")


@pytest.fixture(scope="function")
def bob(make_user):
    return make_user("bob@x.com", name="Bob")


@pytest.fixture(scope="function")
def moderator(make_user):
    return make_user("mod@x.com", name="Mod", role=UserRole.MODERATOR)


@pytest.fixture(scope="function")
def admin_user(make_user):
    return make_user("admin@x.com", name="Admin", role=UserRole.ADMIN)


@pytest.fixture(scope="function")
def alice_product(make_product, alice):
    return make_product(alice.email, name="Alice's Widget")


@pytest.fixture(scope="function")
def headers_for():
    """Factory for bearer headers."""
    return auth_headers
