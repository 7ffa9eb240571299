"""Immutable, validated exchange rate snapshot."""

from collections.abc import Iterator, Mapping
from datetime import date
from decimal import Decimal, InvalidOperation
from types import MappingProxyType

from app.config import settings
from app.services.currency.exceptions import InvalidRateTableError


class ExchangeRateTable(Mapping[str, Decimal]):
    """Currency code -> units of that currency per one unit of the base currency.

    Validation happens once, at construction:
    - the base currency must be present with a rate of exactly 1
    - every rate must be a positive, finite number

    Instances are read-only and safe to share across threads. A refresh
    produces a new table rather than mutating an existing one.
    """

    def __init__(
        self,
        rates: Mapping[str, Decimal | float | int | str],
        base_currency: str | None = None,
        as_of: date | None = None,
    ) -> None:
        self.base_currency = base_currency or settings.base_currency
        self.as_of = as_of
        self._rates = MappingProxyType(
            {code: self._validate(code, value) for code, value in rates.items()}
        )

        base_rate = self._rates.get(self.base_currency)
        if base_rate is None:
            raise InvalidRateTableError(
                f"Base currency {self.base_currency} missing from rate table",
                currency=self.base_currency,
            )
        if base_rate != 1:
            raise InvalidRateTableError(
                f"Base currency {self.base_currency} must have rate 1, got {base_rate}",
                currency=self.base_currency,
            )

    @staticmethod
    def _validate(code: str, value: Decimal | float | int | str) -> Decimal:
        # Floats go through str() so 83.85 stays 83.85 rather than its binary expansion
        try:
            rate = value if isinstance(value, Decimal) else Decimal(str(value))
        except InvalidOperation as e:
            raise InvalidRateTableError(f"Rate for {code} is not a number: {value!r}", code) from e

        if not rate.is_finite() or rate <= 0:
            raise InvalidRateTableError(
                f"Rate for {code} must be positive and finite, got {value!r}", code
            )
        return rate

    def __getitem__(self, code: str) -> Decimal:
        return self._rates[code]

    def __iter__(self) -> Iterator[str]:
        return iter(self._rates)

    def __len__(self) -> int:
        return len(self._rates)

    def merged_with(
        self, overrides: Mapping[str, Decimal | float | int | str], as_of: date | None = None
    ) -> "ExchangeRateTable":
        """Return a new table with `overrides` layered over this one."""
        return ExchangeRateTable(
            {**self._rates, **overrides},
            base_currency=self.base_currency,
            as_of=as_of or self.as_of,
        )

    def __repr__(self) -> str:
        return (
            f"<ExchangeRateTable(base={self.base_currency}, "
            f"currencies={len(self)}, as_of={self.as_of})>"
        )
