"""External market data providers.

- ExchangeRateService: base-pivoted exchange rates from Yahoo Finance

Usage:
    from app.services.market_data import ExchangeRateService

    ExchangeRateService.refresh(db)
    table = ExchangeRateService.load_rate_table(db)
    converter = get_currency_converter().with_rates(table)
"""

from .exchange_rate_service import ExchangeRateService

__all__ = [
    "ExchangeRateService",
]
