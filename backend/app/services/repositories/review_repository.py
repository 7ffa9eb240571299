"""Review data access layer."""

import logging

from sqlalchemy import desc, func, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.constants import ReviewSort
from app.models import Review

from .exceptions import DuplicateError, NotFoundError

logger = logging.getLogger(__name__)


class ReviewRepository:
    """Centralized review data access.

    Naming conventions:
    - find_* : Query that may return None or empty list
    - get_* : Query that raises exception if missing
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    def find_by_id(self, review_id: int) -> Review | None:
        """Find review by primary key."""
        return self._db.query(Review).filter(Review.id == review_id).first()

    def get_by_id(self, review_id: int) -> Review:
        """Get review by primary key.

        Raises:
            NotFoundError: If review doesn't exist
        """
        review = self.find_by_id(review_id)
        if review is None:
            raise NotFoundError("Review", review_id)
        return review

    def find_by_product(self, product_id: int, sort_by: str = ReviewSort.RECENT) -> list[Review]:
        """Find all reviews for a product in the requested order.

        Sort orders:
        - recent: newest first
        - helpful: most helpful votes first
        - rating: highest rating first
        - verified: verified purchases first, newest first within each group
        """
        order_by = {
            ReviewSort.RECENT: (desc(Review.created_at), desc(Review.id)),
            ReviewSort.HELPFUL: (desc(Review.helpful), desc(Review.id)),
            ReviewSort.RATING: (desc(Review.rating), desc(Review.id)),
            ReviewSort.VERIFIED: (
                desc(Review.verified),
                desc(Review.created_at),
                desc(Review.id),
            ),
        }.get(sort_by)

        if order_by is None:
            raise ValueError(f"Unknown review sort order: {sort_by}")

        return (
            self._db.query(Review).filter(Review.product_id == product_id).order_by(*order_by).all()
        )

    def find_ratings_by_product(self, product_id: int) -> list[Review]:
        """Find every review for a product, unordered (aggregation input)."""
        return self._db.query(Review).filter(Review.product_id == product_id).all()

    def find_by_user_email(self, user_email: str) -> list[Review]:
        """Find a user's reviews, newest first."""
        return (
            self._db.query(Review)
            .filter(func.lower(Review.user_email) == user_email.lower())
            .order_by(desc(Review.created_at), desc(Review.id))
            .all()
        )

    def find_by_product_and_user(self, product_id: int, user_email: str) -> Review | None:
        """Find a user's review of a product, if any."""
        return (
            self._db.query(Review)
            .filter(
                Review.product_id == product_id,
                func.lower(Review.user_email) == user_email.lower(),
            )
            .first()
        )

    def create(self, review: Review) -> Review:
        """Insert a review and flush to assign its ID (no commit).

        Raises:
            DuplicateError: If the user already reviewed this product
        """
        self._db.add(review)
        try:
            self._db.flush()
        except IntegrityError as e:
            self._db.rollback()
            logger.warning(f"Duplicate review for product {review.product_id}: {str(e.orig)}")
            raise DuplicateError("Review", "user_email", review.user_email) from e
        return review

    def increment_helpful(self, review_id: int) -> Review:
        """Atomically add one helpful vote.

        Raises:
            NotFoundError: If review doesn't exist
        """
        result = self._db.execute(
            update(Review).where(Review.id == review_id).values(helpful=Review.helpful + 1)
        )
        if result.rowcount == 0:
            raise NotFoundError("Review", review_id)

        review = self.get_by_id(review_id)
        self._db.refresh(review)
        return review
