"""Pytest configuration and fixtures."""

import os
from collections.abc import Generator
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

# Set test environment variables before importing application modules
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SECRET_KEY", "test-secret-key")

from enhanced_commerce.schemas.cart import Cart  # noqa: E402
from enhanced_commerce.schemas.discount import DiscountCode  # noqa: E402
from enhanced_commerce.schemas.order import Order  # noqa: E402
from enhanced_commerce.schemas.pricing import LineItem  # noqa: E402


@pytest.fixture(scope="session")
def test_settings() -> Generator[Any, None, None]:
    """Provide test settings with cleared cache.

    Yields:
        Settings: Test configuration settings.
    """
    from enhanced_commerce.core.config import get_settings

    get_settings.cache_clear()

    settings = get_settings()
    yield settings

    get_settings.cache_clear()


@pytest.fixture
def mock_supabase_client() -> Generator[MagicMock, None, None]:
    """Provide a mocked Supabase client.

    Yields:
        MagicMock: Mocked Supabase client for testing.
    """
    mock_client = MagicMock()

    mock_response = MagicMock()
    mock_response.data = []
    mock_client.table.return_value.select.return_value.limit.return_value.execute.return_value = (
        mock_response
    )

    with patch("enhanced_commerce.core.supabase.get_supabase_client", return_value=mock_client):
        yield mock_client


@pytest.fixture
def mock_store() -> AsyncMock:
    """Provide a commerce store with async methods mocked."""
    from enhanced_commerce.services.commerce_store import CommerceStore

    return AsyncMock(spec=CommerceStore)


@pytest.fixture
def client(mock_supabase_client: MagicMock) -> Generator[TestClient, None, None]:
    """Provide a test client for the FastAPI application.

    Args:
        mock_supabase_client: Mocked Supabase client fixture.

    Yields:
        TestClient: FastAPI test client.
    """
    from enhanced_commerce.main import app

    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_discount_code() -> Any:
    """Factory for discount codes valid throughout 2024 by default."""

    def _make(**overrides: Any) -> DiscountCode:
        data: dict[str, Any] = {
            "id": "discount-1",
            "code": "SAVE10",
            "kind": "percentage",
            "value": Decimal("10"),
            "valid_from": datetime(2024, 1, 1, tzinfo=timezone.utc),
            "valid_until": datetime(2024, 12, 31, 23, 59, 59, tzinfo=timezone.utc),
            "usage_count": 0,
            "active": True,
        }
        data.update(overrides)
        return DiscountCode(**data)

    return _make


@pytest.fixture
def sample_cart() -> Cart:
    """Cart with a 200.00 subtotal."""
    return Cart(
        id="cart-1",
        line_items=(LineItem(unit_price=Decimal("100"), quantity=2),),
    )


@pytest.fixture
def make_order() -> Any:
    """Factory for orders; defaults to a renewable completed order."""

    def _make(**overrides: Any) -> Order:
        data: dict[str, Any] = {
            "id": "order-1",
            "order_number": "ORD-1678838400000-ABCD1234",
            "order_kind": "regular",
            "customer_ref": "customer-1",
            "line_items": (LineItem(unit_price=Decimal("100"), quantity=2),),
            "status": "completed",
            "payment_status": "paid",
            "fulfillment_status": "fulfilled",
            "created_at": datetime(2023, 3, 15, 10, 30, tzinfo=timezone.utc),
        }
        data.update(overrides)
        return Order(**data)

    return _make
