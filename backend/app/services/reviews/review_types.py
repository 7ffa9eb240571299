"""Value objects for review aggregation."""

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.models.review import Review


class HasRating(Protocol):
    """Anything carrying a star rating (ReviewRecord, ORM Review, ...)."""

    rating: int


@dataclass(frozen=True)
class ReviewRecord:
    """Storage-independent snapshot of one review."""

    id: int | str
    subject_id: int | str
    rating: int
    verified: bool = False
    helpful_count: int = 0
    created_at: datetime | None = None
    comment: str = ""
    title: str = ""

    @classmethod
    def from_model(cls, review: "Review") -> "ReviewRecord":
        return cls(
            id=review.id,
            subject_id=review.product_id,
            rating=review.rating,
            verified=bool(review.verified),
            helpful_count=review.helpful or 0,
            created_at=review.created_at,
            comment=review.comment,
            title=review.title or "",
        )
