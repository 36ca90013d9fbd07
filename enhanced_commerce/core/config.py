"""Application configuration management using Pydantic Settings."""

from decimal import Decimal
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Simplified regional sales tax table, keyed by state/province code
DEFAULT_TAX_RATES: dict[str, Decimal] = {
    "CA": Decimal("0.0875"),  # California
    "NY": Decimal("0.08"),  # New York
    "TX": Decimal("0.0625"),  # Texas
    "FL": Decimal("0.06"),  # Florida
}


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings can be overridden via environment variables.
    Store credentials default to empty strings so the pure pricing and
    validation endpoints work without a configured document store.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="enhanced-commerce", description="Application name")
    app_env: str = Field(default="development", description="Environment (development/staging/production)")
    debug: bool = Field(default=False, description="Enable debug mode")

    # Server
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8080, description="Server port")

    # CORS
    cors_origins: str = Field(
        default="http://localhost:3000,http://localhost:3333",
        description="Comma-separated list of allowed CORS origins",
    )

    # Document store (Supabase)
    supabase_url: str = Field(default="", description="Supabase project URL")
    supabase_secret_key: str = Field(default="", description="Supabase secret key for backend operations")

    # Pricing
    default_tax_rate: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        description="Tax rate applied when no regional rate matches the customer address",
    )
    tax_rates: dict[str, Decimal] = Field(
        default_factory=lambda: dict(DEFAULT_TAX_RATES),
        description="Regional tax rates keyed by state code (JSON object in TAX_RATES)",
    )

    # Orders
    order_number_prefix: str = Field(default="ORD", description="Prefix for checkout order numbers")
    renewal_order_number_prefix: str = Field(default="REN", description="Prefix for renewal order numbers")
    default_renewal_period_years: int = Field(default=1, ge=1, description="Renewal period when none is requested")

    # Dashboard
    recent_orders_limit: int = Field(default=10, ge=1, le=100, description="Orders listed on the dashboard")

    @field_validator("tax_rates")
    @classmethod
    def normalize_tax_regions(cls, value: dict[str, Decimal]) -> dict[str, Decimal]:
        """Upper-case region codes so lookups are case insensitive."""
        return {region.strip().upper(): rate for region, rate in value.items()}

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins string into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"

    @property
    def has_store(self) -> bool:
        """Check if document store credentials are configured."""
        return bool(self.supabase_url and self.supabase_secret_key)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings singleton.

    Returns:
        Settings: Application settings instance.

    Note:
        Settings are cached using lru_cache for performance.
        Call get_settings.cache_clear() to reload settings.
    """
    return Settings()
