"""Repository layer - data access abstraction.

Repositories handle all database queries, providing a clean interface
for services. Services should use repositories for data access rather
than directly querying SQLAlchemy models.

Dependency direction: Services -> Repositories -> Models
"""

from .exceptions import DuplicateError, NotFoundError, RepositoryError
from .product_repository import ProductRepository
from .review_repository import ReviewRepository

__all__ = [
    "DuplicateError",
    "NotFoundError",
    "ProductRepository",
    "RepositoryError",
    "ReviewRepository",
]
