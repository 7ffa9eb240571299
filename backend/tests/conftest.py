"""Shared test fixtures: in-memory database and sample catalog rows."""

from datetime import UTC, datetime
from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base
from app.models import Product, Review
from app.schemas.review import ReviewCreate


def make_review_data(product_id: int, **overrides) -> ReviewCreate:
    """Helper to build a valid review submission, overriding any field."""
    data = {
        "product_id": product_id,
        "user_id": "user-1",
        "user_name": "Test Buyer",
        "user_email": "buyer@example.com",
        "rating": 5,
        "title": "Great camera",
        "comment": "Sharp images and fast autofocus.",
    }
    data.update(overrides)
    return ReviewCreate(**data)


def make_review(product_id: int, rating: int, email: str, **overrides) -> Review:
    """Helper to build an unsaved Review row directly."""
    fields = {
        "product_id": product_id,
        "user_id": email.split("@")[0],
        "user_name": email.split("@")[0].title(),
        "user_email": email,
        "rating": rating,
        "title": "",
        "comment": "Seeded review comment text.",
        "helpful": 0,
        "verified": False,
        "created_at": datetime(2024, 1, 1, tzinfo=UTC),
    }
    fields.update(overrides)
    return Review(**fields)


@pytest.fixture
def engine():
    """Create in-memory SQLite database with all tables."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    """Create a database session for each test."""
    testing_session_local = sessionmaker(
        autocommit=False, autoflush=False, bind=engine, expire_on_commit=False
    )
    session = testing_session_local()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def test_product(db):
    """Create a test product with an empty rating summary."""
    product = Product(
        name="Mirrorless Camera",
        price=Decimal("1299.99"),
        currency="USD",
        rating=0.0,
        review_count=0,
    )
    db.add(product)
    db.commit()
    db.refresh(product)
    return product
