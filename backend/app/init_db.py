"""Database initialization script with seed data."""

from datetime import date
from decimal import Decimal

from sqlalchemy.orm import Session

from app.config import settings
from app.constants import RateSource
from app.database import Base, SessionLocal, engine
from app.logging_config import configure_logging
from app.models import ExchangeRate, Product
from app.services.currency.tables import DEFAULT_RATES

SEED_PRODUCTS = [
    {"name": "Mirrorless Camera", "price": Decimal("1299.99")},
    {"name": "Camera Strap", "price": Decimal("49.99")},
    {"name": "Wireless Headphones", "price": Decimal("199.00")},
    {"name": "Mechanical Keyboard", "price": Decimal("89.50")},
]


def create_tables():
    """Create all database tables."""
    print("Creating database tables...")
    Base.metadata.create_all(bind=engine)
    print("Tables created successfully!")


def seed_data(db: Session):
    """Seed the database with sample products and the default rate snapshot."""
    print("\nSeeding database with sample data...")

    print("Creating products...")
    products = [
        Product(currency=settings.base_currency, rating=0.0, review_count=0, **product_data)
        for product_data in SEED_PRODUCTS
    ]
    db.add_all(products)
    db.flush()

    print("Creating exchange rates...")
    today = date.today()
    exchange_rates = [
        ExchangeRate(
            base_currency=settings.base_currency,
            currency=currency,
            rate=rate,
            date=today,
            source=RateSource.DEFAULT,
        )
        for currency, rate in DEFAULT_RATES.items()
        if currency != settings.base_currency
    ]
    db.add_all(exchange_rates)

    db.commit()
    print("Seed data created successfully!")
    print(f"  Products: {len(products)}")
    print(f"  Exchange rates: {len(exchange_rates)} (as of {today})")


def init_db():
    """Initialize database with tables and seed data."""
    print("Initializing database...")

    # Create tables
    create_tables()

    # Seed data
    db = SessionLocal()
    try:
        # Check if data already exists
        existing_products = db.query(Product).count()
        if existing_products > 0:
            print(f"\nDatabase already has {existing_products} products. Skipping seed data.")
            return

        seed_data(db)
        print("\nDatabase initialization complete!")

    except Exception as e:
        print(f"\nError during database initialization: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    configure_logging()
    init_db()
