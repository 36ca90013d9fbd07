"""Unit tests for configuration module."""

import os
from decimal import Decimal
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from enhanced_commerce.core.config import DEFAULT_TAX_RATES, Settings, get_settings


class TestSettings:
    """Tests for Settings class."""

    def test_settings_loads_from_environment(self) -> None:
        """Test that Settings loads values from environment variables."""
        env_vars = {
            "APP_NAME": "test-app",
            "APP_ENV": "testing",
            "DEBUG": "true",
            "HOST": "127.0.0.1",
            "PORT": "9000",
            "SUPABASE_URL": "https://test.supabase.co",
            "SUPABASE_SECRET_KEY": "test-secret",
            "DEFAULT_TAX_RATE": "0.05",
            "ORDER_NUMBER_PREFIX": "WEB",
            "RECENT_ORDERS_LIMIT": "25",
        }

        with patch.dict(os.environ, env_vars, clear=False):
            settings = Settings(_env_file=None)

            assert settings.app_name == "test-app"
            assert settings.app_env == "testing"
            assert settings.debug is True
            assert settings.host == "127.0.0.1"
            assert settings.port == 9000
            assert settings.supabase_url == "https://test.supabase.co"
            assert settings.default_tax_rate == Decimal("0.05")
            assert settings.order_number_prefix == "WEB"
            assert settings.recent_orders_limit == 25

    def test_settings_cors_origins_list(self) -> None:
        """Test that CORS origins are correctly parsed into a list."""
        env_vars = {"CORS_ORIGINS": "http://localhost:3000, http://example.com , http://test.com"}

        with patch.dict(os.environ, env_vars, clear=False):
            settings = Settings(_env_file=None)
            origins = settings.cors_origins_list

            assert len(origins) == 3
            assert "http://localhost:3000" in origins
            assert "http://example.com" in origins
            assert "http://test.com" in origins

    def test_settings_is_production_property(self) -> None:
        """Test the is_production property."""
        with patch.dict(os.environ, {"APP_ENV": "production"}, clear=False):
            assert Settings(_env_file=None).is_production is True

        with patch.dict(os.environ, {"APP_ENV": "development"}, clear=False):
            assert Settings(_env_file=None).is_production is False

    def test_settings_default_values(self) -> None:
        """Test that default values are applied correctly."""
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)

            assert settings.app_name == "enhanced-commerce"
            assert settings.app_env == "development"
            assert settings.debug is False
            assert settings.host == "0.0.0.0"
            assert settings.port == 8080
            assert settings.default_tax_rate == Decimal("0")
            assert settings.tax_rates == DEFAULT_TAX_RATES
            assert settings.order_number_prefix == "ORD"
            assert settings.renewal_order_number_prefix == "REN"
            assert settings.default_renewal_period_years == 1
            assert settings.recent_orders_limit == 10

    def test_store_is_optional(self) -> None:
        """Test that missing store credentials are allowed but reported."""
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)

            assert settings.has_store is False

        env_vars = {"SUPABASE_URL": "https://test.supabase.co", "SUPABASE_SECRET_KEY": "test-secret"}
        with patch.dict(os.environ, env_vars, clear=True):
            assert Settings(_env_file=None).has_store is True

    def test_tax_rates_from_json(self) -> None:
        """Test regional rates parse from JSON with normalized region codes."""
        env_vars = {"TAX_RATES": '{"wa": "0.065", " or ": "0"}'}

        with patch.dict(os.environ, env_vars, clear=True):
            settings = Settings(_env_file=None)

            assert settings.tax_rates == {"WA": Decimal("0.065"), "OR": Decimal("0")}

    def test_negative_default_tax_rate_rejected(self) -> None:
        """Test that validation errors are raised for invalid values."""
        with patch.dict(os.environ, {"DEFAULT_TAX_RATE": "-0.1"}, clear=True):
            with pytest.raises(ValidationError) as exc_info:
                Settings(_env_file=None)

            error_fields = [e["loc"][0] for e in exc_info.value.errors()]
            assert "default_tax_rate" in error_fields


class TestGetSettings:
    """Tests for get_settings function."""

    def test_get_settings_returns_settings(self) -> None:
        """Test that get_settings returns a Settings instance."""
        get_settings.cache_clear()

        settings = get_settings()
        assert isinstance(settings, Settings)

        get_settings.cache_clear()

    def test_get_settings_returns_cached_singleton(self) -> None:
        """Test that get_settings returns the same cached instance."""
        get_settings.cache_clear()

        settings1 = get_settings()
        settings2 = get_settings()

        assert settings1 is settings2

        get_settings.cache_clear()

    def test_get_settings_cache_can_be_cleared(self) -> None:
        """Test that cache can be cleared to reload settings."""
        get_settings.cache_clear()

        settings1 = get_settings()
        get_settings.cache_clear()
        settings2 = get_settings()

        assert settings1 is not settings2

        get_settings.cache_clear()
