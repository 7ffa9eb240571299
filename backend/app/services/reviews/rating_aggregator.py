"""Rating statistics for a product's reviews."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from app.services.reviews.review_types import HasRating

logger = logging.getLogger(__name__)

STARS = (1, 2, 3, 4, 5)


def _empty_distribution() -> dict[int, int]:
    return dict.fromkeys(STARS, 0)


@dataclass(frozen=True)
class RatingSummary:
    """Derived rating statistics; a cache of the review set, never a source of truth.

    Invariants:
    - sum(distribution.values()) == total_reviews
    - average_rating == sum(star * count) / total_reviews, or 0 with no reviews
    """

    average_rating: float = 0.0
    total_reviews: int = 0
    distribution: dict[int, int] = field(default_factory=_empty_distribution)

    def distribution_for_storage(self) -> dict[str, int]:
        """Distribution keyed by strings, as JSON columns store it."""
        return {str(star): count for star, count in self.distribution.items()}


class RatingAggregator:
    """Computes rating summaries by full rescan of a review set."""

    @staticmethod
    def compute(reviews: Iterable[HasRating]) -> RatingSummary:
        """
        Compute count, mean and per-star histogram in one pass.

        Args:
            reviews: Every current review for one product, in any order

        Returns:
            RatingSummary; the average is left unrounded (display rounds it)
        """
        distribution = _empty_distribution()
        total_rating = 0
        total_reviews = 0

        for review in reviews:
            rating = review.rating
            star = round(rating) if rating is not None else None

            # Out-of-range rows would break sum(distribution) == total_reviews
            if star not in distribution:
                logger.warning(f"Skipping review with out-of-range rating {rating!r}")
                continue

            distribution[star] += 1
            total_rating += rating
            total_reviews += 1

        average_rating = total_rating / total_reviews if total_reviews > 0 else 0.0

        return RatingSummary(
            average_rating=average_rating,
            total_reviews=total_reviews,
            distribution=distribution,
        )
