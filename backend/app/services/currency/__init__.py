"""Currency conversion and formatting.

Usage:
    from app.services.currency import get_currency_converter

    converter = get_currency_converter()
    total_inr = converter.convert(total_usd, "USD", "INR")
    label = converter.format(total_inr, "INR")
"""

from .converter import CurrencyConverter, get_currency_converter, round_money, to_decimal
from .currency_types import CurrencyMetadata
from .exceptions import CurrencyError, InvalidRateTableError
from .rate_table import ExchangeRateTable
from .tables import CURRENCIES, DEFAULT_RATES, LOCALE_TO_CURRENCY

__all__ = [
    "CURRENCIES",
    "DEFAULT_RATES",
    "LOCALE_TO_CURRENCY",
    "CurrencyConverter",
    "CurrencyError",
    "CurrencyMetadata",
    "ExchangeRateTable",
    "InvalidRateTableError",
    "get_currency_converter",
    "round_money",
    "to_decimal",
]
