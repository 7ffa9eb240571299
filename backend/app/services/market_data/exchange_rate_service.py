"""Service for refreshing base-pivoted exchange rates from yfinance."""

import logging
from datetime import date
from decimal import Decimal

import yfinance as yf
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.config import settings
from app.constants import RateSource
from app.models.exchange_rate import ExchangeRate
from app.services.currency.exceptions import InvalidRateTableError
from app.services.currency.rate_table import ExchangeRateTable
from app.services.currency.tables import CURRENCIES, DEFAULT_RATES

logger = logging.getLogger(__name__)


class ExchangeRateService:
    """Fetches quotes, stores daily snapshots, and builds rate tables from them."""

    @staticmethod
    def fetch_rate(currency: str, base_currency: str | None = None) -> Decimal | None:
        """
        Fetch the latest rate for one currency against the base currency.

        Args:
            currency: Quote currency code (e.g., "INR")
            base_currency: Pivot currency (default: settings.base_currency)

        Returns:
            Units of `currency` per one base unit, or None if the fetch fails
        """
        base_currency = base_currency or settings.base_currency
        if currency == base_currency:
            return Decimal("1")

        # Yahoo Finance forex symbol format: USDINR=X
        symbol = f"{base_currency}{currency}=X"
        try:
            ticker = yf.Ticker(symbol)
            history = ticker.history(period=settings.exchange_rate_history_period)
        except Exception as e:
            logger.error(f"Error fetching exchange rate {symbol}: {str(e)}")
            return None

        if history.empty or "Close" not in history.columns:
            logger.warning(f"No data for forex pair {symbol}")
            return None

        close_rate = float(history["Close"].iloc[-1])
        if close_rate <= 0:
            logger.warning(f"Ignoring non-positive rate {close_rate} for {symbol}")
            return None

        return Decimal(str(round(close_rate, 6)))

    @staticmethod
    def refresh(
        db: Session,
        currencies: list[str] | None = None,
        target_date: date | None = None,
    ) -> dict:
        """
        Fetch and store a rate snapshot for every supported currency.

        Args:
            db: Database session
            currencies: Currency codes to refresh (default: all configured currencies)
            target_date: Snapshot date (default: today)

        Returns:
            Dict with update statistics
        """
        base_currency = settings.base_currency
        target_date = target_date or date.today()
        currencies = currencies or list(CURRENCIES)

        stats: dict = {
            "date": target_date,
            "updated": 0,
            "skipped": 0,
            "failed": 0,
            "pairs": [],
        }

        for currency in currencies:
            if currency == base_currency:
                continue

            existing = (
                db.query(ExchangeRate)
                .filter(
                    ExchangeRate.base_currency == base_currency,
                    ExchangeRate.currency == currency,
                    ExchangeRate.date == target_date,
                )
                .first()
            )
            if existing:
                logger.debug(f"Rate {base_currency}/{currency} already exists for {target_date}")
                stats["skipped"] += 1
                continue

            rate = ExchangeRateService.fetch_rate(currency, base_currency)
            if rate is None:
                stats["failed"] += 1
                logger.warning(f"Failed to fetch rate {base_currency}/{currency}")
                continue

            db.add(
                ExchangeRate(
                    base_currency=base_currency,
                    currency=currency,
                    rate=rate,
                    date=target_date,
                    source=RateSource.YAHOO_FINANCE,
                )
            )
            stats["updated"] += 1
            stats["pairs"].append(f"{base_currency}/{currency}")
            logger.info(f"Updated rate {base_currency}/{currency} = {rate}")

        try:
            db.commit()
        except Exception as e:
            logger.error(f"Error committing exchange rates: {str(e)}")
            db.rollback()
            stats["failed"] += stats["updated"]
            stats["updated"] = 0
            stats["pairs"] = []

        return stats

    @staticmethod
    def load_rate_table(db: Session, as_of: date | None = None) -> ExchangeRateTable:
        """
        Build a rate table from the most recent stored snapshot per currency.

        Stored rates are layered over the default snapshot, so currencies the
        provider never returned keep their default rate. Rows that would make
        the table invalid are skipped with a warning.

        Args:
            db: Database session
            as_of: Ignore snapshots after this date (default: no limit)

        Returns:
            A validated ExchangeRateTable
        """
        base_currency = settings.base_currency
        defaults = ExchangeRateTable(DEFAULT_RATES, base_currency=base_currency)

        latest_query = db.query(
            ExchangeRate.currency, func.max(ExchangeRate.date).label("latest_date")
        ).filter(ExchangeRate.base_currency == base_currency)
        if as_of:
            latest_query = latest_query.filter(ExchangeRate.date <= as_of)
        latest = latest_query.group_by(ExchangeRate.currency).subquery()

        rows = (
            db.query(ExchangeRate)
            .join(
                latest,
                (ExchangeRate.currency == latest.c.currency)
                & (ExchangeRate.date == latest.c.latest_date),
            )
            .filter(ExchangeRate.base_currency == base_currency)
            .all()
        )

        overrides: dict[str, Decimal] = {}
        newest: date | None = None
        for row in rows:
            if row.currency == base_currency:
                continue
            try:
                ExchangeRateTable({base_currency: 1, row.currency: row.rate}, base_currency)
            except InvalidRateTableError as e:
                logger.warning(f"Skipping stored rate {row!r}: {str(e)}")
                continue
            overrides[row.currency] = row.rate
            newest = max(newest, row.date) if newest else row.date

        if not overrides:
            return defaults

        return defaults.merged_with(overrides, as_of=newest)
