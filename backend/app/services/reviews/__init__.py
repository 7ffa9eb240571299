"""Product reviews: rating aggregation, submission validation, and the review workflow."""

from .rating_aggregator import RatingAggregator, RatingSummary
from .review_service import ReviewService, ReviewValidationError
from .review_types import ReviewRecord
from .validation import SubmissionError, ValidationResult, validate_submission

__all__ = [
    "RatingAggregator",
    "RatingSummary",
    "ReviewRecord",
    "ReviewService",
    "ReviewValidationError",
    "SubmissionError",
    "ValidationResult",
    "validate_submission",
]
