"""Fixtures for repository unit tests."""

from datetime import UTC, datetime

import pytest

from tests.conftest import make_review


@pytest.fixture
def seeded_reviews(db, test_product):
    """Four reviews with distinct dates, votes, ratings and verification."""
    reviews = {
        "alice": make_review(
            test_product.id, 5, "alice@example.com",
            helpful=1, created_at=datetime(2024, 1, 1, tzinfo=UTC),
        ),
        "bob": make_review(
            test_product.id, 3, "bob@example.com",
            helpful=7, verified=True, created_at=datetime(2024, 1, 3, tzinfo=UTC),
        ),
        "carol": make_review(
            test_product.id, 4, "carol@example.com",
            helpful=3, created_at=datetime(2024, 1, 5, tzinfo=UTC),
        ),
        "dave": make_review(
            test_product.id, 1, "dave@example.com",
            verified=True, created_at=datetime(2024, 1, 2, tzinfo=UTC),
        ),
    }
    db.add_all(reviews.values())
    db.commit()
    return reviews
