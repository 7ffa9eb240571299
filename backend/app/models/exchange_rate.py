"""Exchange Rate model - base-pivoted currency rate snapshots."""

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import Date, Index, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from app.database import Base


class ExchangeRate(Base):
    """Units of `currency` per one unit of `base_currency` on a given date."""

    __tablename__ = "exchange_rates"
    __table_args__ = (
        UniqueConstraint("base_currency", "currency", "date", name="uq_exchange_rate"),
        Index("idx_rates_currency_date", "base_currency", "currency", "date"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    base_currency: Mapped[str] = mapped_column(String(3), default="USD")
    currency: Mapped[str] = mapped_column(String(3))
    rate: Mapped[Decimal] = mapped_column(Numeric(14, 6))
    date: Mapped[date] = mapped_column(Date)
    source: Mapped[str | None] = mapped_column(String(50))
    created_at: Mapped[datetime] = mapped_column(server_default=func.now())

    def __repr__(self) -> str:
        return f"<ExchangeRate({self.base_currency}/{self.currency}={self.rate} on {self.date})>"
