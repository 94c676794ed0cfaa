"""Application configuration.

Loads settings from environment variables with sensible defaults.
"""

from decimal import Decimal

from pydantic_settings import BaseSettings

from mercato.domain.validation import ProductLimits


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API
    api_version: str = "0.1.0"
    debug: bool = False

    # Authentication
    api_key: str = "dev-api-key-change-in-production"

    # Persistence: "memory" or "database"
    repository_backend: str = "memory"
    database_url: str = "postgresql+asyncpg://mercato:mercato_dev_password@db:5432/mercato"

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    # Product field limits
    title_min_length: int = 2
    title_max_length: int = 200
    description_max_length: int = 2000
    category_min_length: int = 2
    category_max_length: int = 100
    weight_max_kg: Decimal = Decimal("1000")
    dimension_max_cm: Decimal = Decimal("500")
    shipping_methods_max_length: int = 500
    images_max_length: int = 4000

    class Config:
        """Pydantic configuration."""

        env_prefix = "MERCATO_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @property
    def product_limits(self) -> ProductLimits:
        """Field bounds used by product validation."""
        return ProductLimits(
            title_min_length=self.title_min_length,
            title_max_length=self.title_max_length,
            description_max_length=self.description_max_length,
            category_min_length=self.category_min_length,
            category_max_length=self.category_max_length,
            weight_max_kg=self.weight_max_kg,
            dimension_max_cm=self.dimension_max_cm,
            shipping_methods_max_length=self.shipping_methods_max_length,
            images_max_length=self.images_max_length,
        )


settings = Settings()
