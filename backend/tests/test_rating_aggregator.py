"""Tests for RatingAggregator.compute."""

import random
from datetime import UTC, datetime
from types import SimpleNamespace

import pytest

from app.services.reviews import RatingAggregator, RatingSummary, ReviewRecord


def records(*ratings: int) -> list[ReviewRecord]:
    return [
        ReviewRecord(id=i, subject_id="camera-1", rating=rating) for i, rating in enumerate(ratings)
    ]


class TestCompute:
    """Count, mean and histogram of a review set."""

    def test_empty_review_set(self):
        summary = RatingAggregator.compute([])

        assert summary.average_rating == 0
        assert summary.total_reviews == 0
        assert summary.distribution == {1: 0, 2: 0, 3: 0, 4: 0, 5: 0}

    def test_empty_summary_default_matches_compute(self):
        assert RatingSummary() == RatingAggregator.compute([])

    def test_mixed_ratings(self):
        summary = RatingAggregator.compute(records(5, 4, 4))

        assert summary.total_reviews == 3
        assert summary.average_rating == pytest.approx(4.3333, abs=1e-3)
        assert summary.distribution == {1: 0, 2: 0, 3: 0, 4: 2, 5: 1}

    def test_average_is_not_rounded(self):
        summary = RatingAggregator.compute(records(5, 4, 4))
        assert summary.average_rating == 13 / 3

    def test_single_review(self):
        summary = RatingAggregator.compute(records(1))

        assert summary.average_rating == 1
        assert summary.distribution[1] == 1

    def test_distribution_sums_to_total(self):
        rng = random.Random(42)
        for size in (1, 2, 10, 250):
            ratings = [rng.randint(1, 5) for _ in range(size)]
            summary = RatingAggregator.compute(records(*ratings))

            assert sum(summary.distribution.values()) == summary.total_reviews == size
            weighted = sum(star * count for star, count in summary.distribution.items())
            assert summary.average_rating == pytest.approx(weighted / size)

    def test_order_does_not_matter(self):
        ratings = [5, 1, 3, 3, 4, 2, 5]
        shuffled = list(reversed(ratings))

        assert RatingAggregator.compute(records(*ratings)) == RatingAggregator.compute(
            records(*shuffled)
        )

    def test_idempotent(self):
        reviews = records(2, 5, 5)
        assert RatingAggregator.compute(reviews) == RatingAggregator.compute(reviews)

    def test_accepts_generators(self):
        summary = RatingAggregator.compute(r for r in records(3, 5))
        assert summary.total_reviews == 2

    def test_accepts_any_object_with_rating(self):
        """ORM rows and plain objects work as long as they expose `rating`."""
        reviews = [SimpleNamespace(rating=4), SimpleNamespace(rating=2)]

        summary = RatingAggregator.compute(reviews)

        assert summary.average_rating == 3
        assert summary.distribution[2] == 1

    def test_out_of_range_ratings_are_skipped(self, caplog):
        """Rows that slipped past validation cannot break the histogram invariant."""
        reviews = [SimpleNamespace(rating=r) for r in (5, 0, 7, None, 3)]

        summary = RatingAggregator.compute(reviews)

        assert summary.total_reviews == 2
        assert summary.average_rating == 4
        assert sum(summary.distribution.values()) == summary.total_reviews
        assert "out-of-range" in caplog.text


class TestRatingSummary:
    """Tests for RatingSummary helpers."""

    def test_distribution_for_storage_uses_string_keys(self):
        summary = RatingAggregator.compute(records(5, 4, 4))

        assert summary.distribution_for_storage() == {"1": 0, "2": 0, "3": 0, "4": 2, "5": 1}

    def test_default_distributions_are_independent(self):
        first, second = RatingSummary(), RatingSummary()
        assert first.distribution is not second.distribution


class TestReviewRecord:
    """Tests for ReviewRecord.from_model."""

    def test_from_model(self):
        created = datetime(2024, 1, 5, tzinfo=UTC)
        row = SimpleNamespace(
            id=7,
            product_id=3,
            rating=4,
            verified=True,
            helpful=None,
            created_at=created,
            comment="Solid build quality.",
            title=None,
        )

        record = ReviewRecord.from_model(row)

        assert record == ReviewRecord(
            id=7,
            subject_id=3,
            rating=4,
            verified=True,
            helpful_count=0,
            created_at=created,
            comment="Solid build quality.",
            title="",
        )
