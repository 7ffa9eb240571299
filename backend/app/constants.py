"""Application constants to avoid magic strings."""


class Currency:
    """Supported currency codes."""

    USD = "USD"
    INR = "INR"
    EUR = "EUR"
    GBP = "GBP"
    JPY = "JPY"
    AUD = "AUD"
    CAD = "CAD"
    SGD = "SGD"


class ReviewSort:
    """Sort orders accepted when listing a product's reviews."""

    RECENT = "recent"
    HELPFUL = "helpful"
    RATING = "rating"
    VERIFIED = "verified"


class RateSource:
    """Exchange rate data sources."""

    DEFAULT = "Default"
    YAHOO_FINANCE = "YahooFinance"
