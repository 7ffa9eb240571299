"""Review submission validation gate."""

from dataclasses import dataclass
from enum import Enum

from app.config import settings

MIN_RATING = 1
MAX_RATING = 5


class SubmissionError(str, Enum):
    """Why a review submission was rejected."""

    INVALID_RATING = "InvalidRating"
    COMMENT_TOO_SHORT = "CommentTooShort"


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validate_submission. Truthy when the submission is valid."""

    is_valid: bool
    error: SubmissionError | None = None
    message: str | None = None

    def __bool__(self) -> bool:
        return self.is_valid


def validate_submission(
    rating: int, comment: str | None, min_comment_length: int | None = None
) -> ValidationResult:
    """
    Check a review submission before anything is written.

    Args:
        rating: Star rating, an integer from 1 to 5
        comment: Review body; surrounding whitespace does not count toward its length
        min_comment_length: Minimum comment length (default: settings.review_min_comment_length)

    Returns:
        ValidationResult describing the first failed rule, or a valid result
    """
    if min_comment_length is None:
        min_comment_length = settings.review_min_comment_length

    if (
        isinstance(rating, bool)
        or not isinstance(rating, int)
        or not MIN_RATING <= rating <= MAX_RATING
    ):
        return ValidationResult(
            is_valid=False,
            error=SubmissionError.INVALID_RATING,
            message=f"Rating must be between {MIN_RATING} and {MAX_RATING}",
        )

    if len((comment or "").strip()) < min_comment_length:
        return ValidationResult(
            is_valid=False,
            error=SubmissionError.COMMENT_TOO_SHORT,
            message=f"Review must be at least {min_comment_length} characters long",
        )

    return ValidationResult(is_valid=True)
