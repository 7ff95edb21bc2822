"""Application configuration."""
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Square
    square_location_id: str

    # Catalog
    catalog_file: Optional[str] = None

    # Restaurant
    restaurant_name: str = "Burger Rebellion"
    order_source_name: str = "Voice Ordering"

    # Fallback custom line items (minor units)
    default_price_amount: int = 1000
    currency: str = "USD"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


settings = Settings()
