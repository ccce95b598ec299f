"""Application configuration."""
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = "sqlite+aiosqlite:///./restaurant_ops.db"

    # Restaurant
    restaurant_id: int = 1
    restaurant_name: str = "Campomar"

    # Persisted state
    state_key: str = "restaurant_manager_state_v1"

    # Seed data
    table_count: int = 10
    seed_occupied_tables: int = 2

    # Demo ticker
    demo_ticker_enabled: bool = True
    demo_ticker_interval_seconds: float = 12.0

    # Dashboard
    top_sellers_limit: int = 7
    trend_days: int = 14

    # Server
    host: str = "0.0.0.0"
    port: int = 8080

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


settings = Settings()
