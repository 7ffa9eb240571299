"""Pydantic schemas for Review model."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class ReviewBase(BaseModel):
    """Base Review schema with common fields."""

    product_id: int
    user_id: str = Field(..., max_length=36)
    user_name: str = Field(..., max_length=100)
    user_email: EmailStr
    # Range and comment length are checked by validate_submission, not here,
    # so a bad submission comes back as a typed ValidationResult
    rating: int = Field(..., description="Star rating from 1 to 5")
    title: str = Field("", max_length=200)
    comment: str
    order_id: str | None = Field(None, max_length=64, description="Order backing a verified review")


class ReviewCreate(ReviewBase):
    """Schema for creating a new Review."""

    pass


class Review(ReviewBase):
    """Schema for Review responses."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    helpful: int = 0
    verified: bool = False
    created_at: datetime | None = None


class RatingSummary(BaseModel):
    """Schema for a product's rating statistics."""

    model_config = ConfigDict(from_attributes=True)

    average_rating: float = Field(..., ge=0, le=5)
    total_reviews: int = Field(..., ge=0)
    distribution: dict[int, int]
