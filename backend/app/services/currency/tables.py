"""Static currency tables loaded once at import time."""

from decimal import Decimal
from types import MappingProxyType

from app.constants import Currency
from app.services.currency.currency_types import CurrencyMetadata

CURRENCIES = MappingProxyType(
    {
        Currency.USD: CurrencyMetadata(code=Currency.USD, symbol="$", locale="en-US"),
        Currency.INR: CurrencyMetadata(code=Currency.INR, symbol="₹", locale="en-IN"),
        Currency.EUR: CurrencyMetadata(code=Currency.EUR, symbol="€", locale="de-DE"),
        Currency.GBP: CurrencyMetadata(code=Currency.GBP, symbol="£", locale="en-GB"),
        Currency.JPY: CurrencyMetadata(code=Currency.JPY, symbol="¥", locale="ja-JP"),
        Currency.AUD: CurrencyMetadata(code=Currency.AUD, symbol="A$", locale="en-AU"),
        Currency.CAD: CurrencyMetadata(code=Currency.CAD, symbol="C$", locale="en-CA"),
        Currency.SGD: CurrencyMetadata(code=Currency.SGD, symbol="S$", locale="en-SG"),
    }
)

# Units of each currency per 1 USD. Snapshot only; ExchangeRateService refreshes it.
DEFAULT_RATES = MappingProxyType(
    {
        Currency.USD: Decimal("1.0"),
        Currency.INR: Decimal("83.85"),
        Currency.EUR: Decimal("0.86"),
        Currency.GBP: Decimal("0.79"),
        Currency.JPY: Decimal("149.50"),
        Currency.AUD: Decimal("1.53"),
        Currency.CAD: Decimal("1.36"),
        Currency.SGD: Decimal("1.34"),
    }
)

# Order matters: language-only matches pick the first entry for that language
LOCALE_TO_CURRENCY = MappingProxyType(
    {
        "en-US": Currency.USD,
        "en-IN": Currency.INR,
        "en-GB": Currency.GBP,
        "de-DE": Currency.EUR,
        "fr-FR": Currency.EUR,
        "es-ES": Currency.EUR,
        "it-IT": Currency.EUR,
        "ja-JP": Currency.JPY,
        "en-AU": Currency.AUD,
        "en-CA": Currency.CAD,
        "en-SG": Currency.SGD,
    }
)
