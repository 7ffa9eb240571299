"""Application configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    # Database
    database_url: str = "sqlite:///./storefront.db"

    # Currency
    base_currency: str = "USD"
    default_currency: str = "USD"
    exchange_rate_history_period: str = "5d"

    # Reviews
    review_min_comment_length: int = 10

    # Session inactivity
    session_timeout_minutes: int = 15
    session_warning_minutes: int = 2  # Warning lead time before timeout
    session_check_interval_seconds: int = 30

    # Application
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )


settings = Settings()
