"""Fixtures for service unit tests."""

import pytest

from app.services.reviews import ReviewService
from tests.unit.repositories.conftest import seeded_reviews

__all__ = ["seeded_reviews", "review_service"]


@pytest.fixture
def review_service(db):
    return ReviewService(db)
