"""Review workflow: validate, persist, and keep product rating summaries current."""

import logging
from collections.abc import Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.constants import ReviewSort
from app.models import Review
from app.schemas.review import ReviewCreate
from app.services.repositories.exceptions import DuplicateError
from app.services.repositories.product_repository import ProductRepository
from app.services.repositories.review_repository import ReviewRepository
from app.services.reviews.rating_aggregator import RatingAggregator, RatingSummary
from app.services.reviews.review_types import ReviewRecord
from app.services.reviews.validation import ValidationResult, validate_submission

logger = logging.getLogger(__name__)

# (order_id, product_id) -> whether the order contains the product
PurchaseVerifier = Callable[[str, int], bool]


class ReviewValidationError(ValueError):
    """Submission failed validate_submission; nothing was written."""

    def __init__(self, result: ValidationResult):
        self.result = result
        super().__init__(result.message)


class ReviewService:
    """Creates and lists reviews and recomputes product rating summaries.

    Summaries are always rebuilt from the full review set rather than
    adjusted incrementally, so a bad write is corrected by the next one.
    Two concurrent submissions for the same product each write a summary
    that was correct for what they read; the product row lock taken in
    `update_product_rating_stats` serializes them on backends that support it.

    Purchase checks live in the order system; pass `purchase_verifier` to
    mark reviews backed by a matching order as verified.
    """

    def __init__(self, db: Session, purchase_verifier: PurchaseVerifier | None = None) -> None:
        self._db = db
        self.purchase_verifier = purchase_verifier
        self.reviews = ReviewRepository(db)
        self.products = ProductRepository(db)

    def create_review(self, data: ReviewCreate, verified: bool = False) -> Review:
        """
        Create a review and refresh the product's rating summary.

        Args:
            data: Review submission
            verified: Caller already confirmed the purchase. Otherwise the
                purchase verifier, if any, checks `data.order_id`

        Returns:
            The persisted review

        Raises:
            ReviewValidationError: Rating or comment failed validation
            NotFoundError: Product doesn't exist
            DuplicateError: User already reviewed this product
        """
        result = validate_submission(data.rating, data.comment)
        if not result:
            raise ReviewValidationError(result)

        self.products.get_by_id(data.product_id)

        if self.has_user_reviewed(data.product_id, data.user_email):
            raise DuplicateError("Review", "user_email", data.user_email)

        verified = verified or self.verify_purchase(data.order_id, data.product_id)

        review = Review(
            product_id=data.product_id,
            user_id=data.user_id,
            user_name=data.user_name,
            user_email=data.user_email,
            rating=data.rating,
            title=data.title.strip(),
            comment=data.comment.strip(),
            order_id=data.order_id,
            helpful=0,
            verified=verified,
        )
        self.reviews.create(review)
        self._db.commit()
        logger.info(f"Created review {review.id} for product {data.product_id}")

        # The review stands even if the summary write fails; the next write recomputes it
        try:
            self.update_product_rating_stats(data.product_id)
        except SQLAlchemyError as e:
            logger.error(f"Error updating rating stats for product {data.product_id}: {str(e)}")
            self._db.rollback()

        return review

    def list_product_reviews(self, product_id: int, sort_by: str = ReviewSort.RECENT) -> list[Review]:
        """List a product's reviews (recent, helpful, rating, or verified first)."""
        return self.reviews.find_by_product(product_id, sort_by)

    def list_user_reviews(self, user_email: str) -> list[Review]:
        """List a user's reviews, newest first."""
        return self.reviews.find_by_user_email(user_email)

    def has_user_reviewed(self, product_id: int, user_email: str) -> bool:
        return self.reviews.find_by_product_and_user(product_id, user_email) is not None

    def mark_review_helpful(self, review_id: int) -> Review:
        """Add one helpful vote to a review.

        Raises:
            NotFoundError: Review doesn't exist
        """
        review = self.reviews.increment_helpful(review_id)
        self._db.commit()
        return review

    def get_review_stats(self, product_id: int) -> RatingSummary:
        """Compute a product's rating summary without writing it."""
        rows = self.reviews.find_ratings_by_product(product_id)
        return RatingAggregator.compute(ReviewRecord.from_model(row) for row in rows)

    def update_product_rating_stats(self, product_id: int) -> RatingSummary:
        """
        Recompute a product's rating summary and store it on the product.

        Args:
            product_id: Product whose reviews changed

        Returns:
            The summary written to the product

        Raises:
            NotFoundError: Product doesn't exist
        """
        product = self.products.get_for_update(product_id)
        summary = self.get_review_stats(product_id)
        self.products.apply_rating_summary(product, summary)
        self._db.commit()
        return summary

    def verify_purchase(self, order_id: str | None, product_id: int) -> bool:
        """Whether `order_id` is an order containing the product.

        False when there is no order, no verifier, or the verifier fails.
        """
        if not order_id or self.purchase_verifier is None:
            return False

        try:
            return bool(self.purchase_verifier(order_id, product_id))
        except Exception as e:
            logger.error(f"Error verifying purchase for order {order_id}: {str(e)}")
            return False
