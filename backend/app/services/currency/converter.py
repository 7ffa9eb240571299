"""Currency conversion and locale-aware money formatting."""

import logging
from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Context, Decimal, InvalidOperation, getcontext, localcontext
from functools import lru_cache

from babel import Locale, UnknownLocaleError
from babel.numbers import format_currency

from app.config import settings
from app.services.currency.currency_types import CurrencyMetadata
from app.services.currency.exceptions import InvalidRateTableError
from app.services.currency.rate_table import ExchangeRateTable
from app.services.currency.tables import CURRENCIES, DEFAULT_RATES, LOCALE_TO_CURRENCY

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")

# Significant digits kept below the units place for any magnitude
FRACTION_HEADROOM = 12


def to_decimal(amount: Decimal | float | int) -> Decimal:
    """Convert a numeric amount to Decimal without picking up float noise."""
    if isinstance(amount, Decimal):
        return amount
    return Decimal(str(amount))


def money_context(value: Decimal) -> Context:
    """Decimal context wide enough to hold every integer digit of `value` plus headroom.

    The default 28-digit context cannot quantize amounts from about 1e26 up.
    """
    context = getcontext().copy()
    context.prec = max(context.prec, value.adjusted() + 1 + FRACTION_HEADROOM)
    return context


def round_money(amount: Decimal | float | int) -> Decimal:
    """Round to 2 decimal places, half away from zero (1.005 -> 1.01, -1.005 -> -1.01)."""
    value = to_decimal(amount)
    with localcontext(money_context(value)):
        return value.quantize(CENTS, rounding=ROUND_HALF_UP)


class CurrencyConverter:
    """Converts and formats amounts using an injected rate table.

    All conversions pivot through the table's base currency. The converter
    holds no mutable state; swapping in fresh rates produces a new instance
    via `with_rates`.

    Usage:
        converter = CurrencyConverter()
        converter.convert(Decimal("100"), "USD", "INR")  # Decimal("8385.00")
        converter.format(Decimal("117387.48"), "INR")    # "₹1,17,387.48"
    """

    def __init__(
        self,
        rates: ExchangeRateTable | None = None,
        currencies: Mapping[str, CurrencyMetadata] | None = None,
        default_currency: str | None = None,
    ) -> None:
        self.rates = rates if rates is not None else ExchangeRateTable(DEFAULT_RATES)
        self.currencies = currencies if currencies is not None else CURRENCIES
        self.default_currency = default_currency or settings.default_currency

        missing = [code for code in self.currencies if code not in self.rates]
        if missing:
            raise InvalidRateTableError(
                f"No exchange rate for configured currencies: {', '.join(sorted(missing))}",
                currency=missing[0],
            )
        if self.base_currency not in self.currencies:
            raise InvalidRateTableError(
                f"Base currency {self.base_currency} has no display metadata",
                currency=self.base_currency,
            )

    @property
    def base_currency(self) -> str:
        return self.rates.base_currency

    def with_rates(self, rates: ExchangeRateTable) -> "CurrencyConverter":
        """Return a converter sharing this one's metadata but using new rates."""
        return CurrencyConverter(
            rates=rates, currencies=self.currencies, default_currency=self.default_currency
        )

    def is_supported(self, currency: str | None) -> bool:
        """Whether a code has both display metadata and an exchange rate."""
        return currency in self.currencies and currency in self.rates

    def supported_currencies(self) -> list[str]:
        return [code for code in self.currencies if code in self.rates]

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def try_convert(
        self, amount: Decimal | float | int, from_currency: str, to_currency: str
    ) -> Decimal | None:
        """
        Convert an amount from one currency to another.

        Args:
            amount: Amount to convert (any finite value, negatives included)
            from_currency: Source currency code
            to_currency: Target currency code

        Returns:
            Converted amount rounded to cents, the unchanged amount for a
            same-currency conversion, or None if either code is unknown
        """
        if from_currency == to_currency:
            return amount

        if not self.is_supported(from_currency) or not self.is_supported(to_currency):
            return None

        value = to_decimal(amount)
        # Round once at the end; rounding the base amount first would compound error
        with localcontext(money_context(value * self.rates[to_currency])):
            amount_in_base = value / self.rates[from_currency]
            converted = amount_in_base * self.rates[to_currency]
        return round_money(converted)

    def convert(
        self, amount: Decimal | float | int, from_currency: str, to_currency: str
    ) -> Decimal | float | int:
        """
        Convert an amount, degrading gracefully on unknown currencies.

        Checkout and cart totals must never fail to render, so an unknown
        code logs a warning and returns the original amount. Callers that
        need to detect the failure should use `try_convert`.
        """
        converted = self.try_convert(amount, from_currency, to_currency)

        if converted is None:
            logger.warning(
                f"No exchange rate for {from_currency}/{to_currency}, returning original amount"
            )
            return amount

        return converted

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def metadata_for(self, currency: str | None) -> CurrencyMetadata:
        """Metadata for a code, falling back to the base currency."""
        return self.currencies.get(currency) or self.currencies[self.base_currency]

    def symbol_for(self, currency: str | None) -> str:
        return self.metadata_for(currency).symbol

    def format(self, amount: Decimal | float | int, currency: str | None = None) -> str:
        """
        Format an amount for display in the currency's own locale.

        Always renders exactly two fraction digits, including for currencies
        such as JPY whose ISO minor unit is zero. Unknown codes render as the
        base currency. Never raises.

        Examples:
            format(1234.56, "USD")  # "$1,234.56"
            format(1234.56, "INR")  # "₹1,234.56"
            format(1234.56, "EUR")  # "1.234,56 €"
        """
        config = self.metadata_for(currency or self.default_currency)
        value = round_money(amount)

        try:
            # Babel quantizes in the active context
            with localcontext(money_context(value)):
                return format_currency(
                    value,
                    config.code,
                    locale=Locale.parse(config.locale, sep="-"),
                    currency_digits=False,
                )
        except (UnknownLocaleError, ValueError, InvalidOperation) as e:
            logger.error(f"Currency formatting error for {config.code}/{config.locale}: {str(e)}")
            return f"{config.symbol}{value:.2f}"

    # ------------------------------------------------------------------
    # Preference resolution
    # ------------------------------------------------------------------

    def detect_default_currency(self, locale_hint: str | None) -> str:
        """
        Map a locale tag such as "en-IN" or "fr_CA" to a currency.

        Tries an exact locale match, then the first known locale sharing
        the language subtag, then the configured default currency.
        """
        if not locale_hint:
            return self.default_currency

        parts = locale_hint.strip().replace("_", "-").split("-")
        language = parts[0].lower()
        region = next((part.upper() for part in parts[1:] if len(part) == 2), None)

        if region:
            exact = LOCALE_TO_CURRENCY.get(f"{language}-{region}")
            if exact and self.is_supported(exact):
                return exact

        for tag, currency in LOCALE_TO_CURRENCY.items():
            if tag.split("-")[0] == language and self.is_supported(currency):
                return currency

        return self.default_currency

    def resolve_user_currency(self, stored_preference: str | None, locale_hint: str | None) -> str:
        """Use a stored preference when it is supported, else detect from locale."""
        if stored_preference and self.is_supported(stored_preference):
            return stored_preference
        return self.detect_default_currency(locale_hint)


@lru_cache
def get_currency_converter() -> CurrencyConverter:
    """Process-wide converter built from the default snapshot."""
    return CurrencyConverter()
