"""Value objects for currency conversion and formatting."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CurrencyMetadata:
    """Display facts for one supported currency."""

    code: str
    symbol: str
    locale: str  # BCP 47 tag, e.g. "en-IN"
