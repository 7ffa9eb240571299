"""Currency configuration exceptions."""


class CurrencyError(Exception):
    """Base exception for currency configuration problems."""


class InvalidRateTableError(CurrencyError, ValueError):
    """Exchange rate table or currency metadata violates its invariants."""

    def __init__(self, message: str, currency: str | None = None):
        self.currency = currency
        super().__init__(message)
