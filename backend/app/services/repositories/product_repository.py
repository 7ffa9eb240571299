"""Product data access layer."""

import logging
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from app.models import Product

from .exceptions import NotFoundError

if TYPE_CHECKING:
    from app.services.reviews.rating_aggregator import RatingSummary

logger = logging.getLogger(__name__)


class ProductRepository:
    """Centralized product data access.

    Naming conventions:
    - find_* : Query that may return None
    - get_* : Query that raises exception if missing
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    def find_by_id(self, product_id: int) -> Product | None:
        """Find product by primary key."""
        return self._db.query(Product).filter(Product.id == product_id).first()

    def get_by_id(self, product_id: int) -> Product:
        """Get product by primary key.

        Raises:
            NotFoundError: If product doesn't exist
        """
        product = self.find_by_id(product_id)
        if product is None:
            raise NotFoundError("Product", product_id)
        return product

    def get_for_update(self, product_id: int) -> Product:
        """Get product with a row lock, serializing concurrent summary writes.

        Backends without row locks (SQLite) ignore FOR UPDATE, leaving
        last-write-wins behaviour.

        Raises:
            NotFoundError: If product doesn't exist
        """
        product = (
            self._db.query(Product).filter(Product.id == product_id).with_for_update().first()
        )
        if product is None:
            raise NotFoundError("Product", product_id)
        return product

    def apply_rating_summary(self, product: Product, summary: "RatingSummary") -> Product:
        """Copy a rating summary onto the product's denormalized fields (no commit)."""
        product.rating = summary.average_rating
        product.review_count = summary.total_reviews
        product.rating_distribution = summary.distribution_for_storage()
        self._db.flush()
        logger.debug(
            f"Product {product.id} rating={summary.average_rating:.3f} "
            f"reviews={summary.total_reviews}"
        )
        return product
