"""Services layer - business logic and external integrations.

This module is organized into domain-based subpackages:
- currency/: Currency conversion and formatting
- market_data/: External exchange rate provider
- repositories/: Data access layer
- reviews/: Rating aggregation, submission validation, review workflow
- session/: Inactivity tracking and timeout polling

Common imports for convenience:
    from app.services import CurrencyConverter, RatingAggregator
    from app.services import ActivityTimeoutTracker, ReviewService
"""

# Re-export commonly used components for convenience
from app.services.currency import CurrencyConverter, ExchangeRateTable, get_currency_converter
from app.services.repositories import (
    DuplicateError,
    NotFoundError,
    ProductRepository,
    RepositoryError,
    ReviewRepository,
)
from app.services.reviews import (
    RatingAggregator,
    RatingSummary,
    ReviewService,
    ValidationResult,
    validate_submission,
)
from app.services.session import ActivityTimeoutTracker, SessionSignal, SessionTimeoutMonitor

__all__ = [
    # Currency
    "CurrencyConverter",
    "ExchangeRateTable",
    "get_currency_converter",
    # Repositories
    "DuplicateError",
    "NotFoundError",
    "ProductRepository",
    "RepositoryError",
    "ReviewRepository",
    # Reviews
    "RatingAggregator",
    "RatingSummary",
    "ReviewService",
    "ValidationResult",
    "validate_submission",
    # Session
    "ActivityTimeoutTracker",
    "SessionSignal",
    "SessionTimeoutMonitor",
]
