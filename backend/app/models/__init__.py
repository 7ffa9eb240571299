"""SQLAlchemy ORM models."""

from app.models.exchange_rate import ExchangeRate
from app.models.product import Product
from app.models.review import Review

__all__ = [
    "ExchangeRate",
    "Product",
    "Review",
]
