"""Pydantic schemas for workflow input and output validation."""

from app.schemas.review import RatingSummary, Review, ReviewCreate

__all__ = [
    "RatingSummary",
    "Review",
    "ReviewCreate",
]
