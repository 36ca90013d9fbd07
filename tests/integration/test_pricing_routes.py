"""Integration tests for pricing and discount validation endpoints."""

from decimal import Decimal
from unittest.mock import patch

from fastapi.testclient import TestClient


DISCOUNT_CODE = {
    "id": "discount-1",
    "code": "SAVE10",
    "kind": "percentage",
    "value": "10",
    "maximum_discount": "15",
    "valid_from": "2024-01-01T00:00:00Z",
    "valid_until": "2099-12-31T23:59:59Z",
    "usage_count": 0,
    "active": True,
}


class TestPricingTotals:
    """Tests for POST /api/v1/pricing/totals."""

    def test_totals_with_capped_discount_and_tax(self, client: TestClient) -> None:
        """Test the capped percentage example end to end."""
        response = client.post(
            "/api/v1/pricing/totals",
            json={
                "line_items": [{"unit_price": "100", "quantity": 2}],
                "discount_code": DISCOUNT_CODE,
                "tax_rate": "0.08",
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert Decimal(data["subtotal"]) == Decimal("200")
        assert Decimal(data["discount"]) == Decimal("15")
        assert Decimal(data["tax"]) == Decimal("14.8")
        assert Decimal(data["total"]) == Decimal("199.8")

    def test_tax_rate_from_address(self, client: TestClient) -> None:
        """Test the regional rate is used when no tax rate is given."""
        response = client.post(
            "/api/v1/pricing/totals",
            json={
                "line_items": [{"unit_price": "50", "quantity": 2}],
                "additional_line_items": [{"title": "Setup", "unit_price": "20", "total_price": "20"}],
                "address": {"state": "TX"},
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert Decimal(data["subtotal"]) == Decimal("120")
        assert Decimal(data["tax"]) == Decimal("7.5")
        assert Decimal(data["total"]) == Decimal("127.5")

    def test_empty_request_is_zero(self, client: TestClient) -> None:
        """Test that no items gives zero totals."""
        response = client.post("/api/v1/pricing/totals", json={})

        assert response.status_code == 200
        assert Decimal(response.json()["total"]) == Decimal("0")

    def test_negative_unit_price_rejected(self, client: TestClient) -> None:
        """Test that malformed line items fail request validation."""
        response = client.post(
            "/api/v1/pricing/totals",
            json={"line_items": [{"unit_price": "-1", "quantity": 1}]},
        )

        assert response.status_code == 422

    def test_zero_quantity_rejected(self, client: TestClient) -> None:
        """Test that quantity must be at least one."""
        response = client.post(
            "/api/v1/pricing/totals",
            json={"line_items": [{"unit_price": "10", "quantity": 0}]},
        )

        assert response.status_code == 422


class TestPricingTax:
    """Tests for POST /api/v1/pricing/tax."""

    def test_known_state(self, client: TestClient) -> None:
        """Test tax for a state in the rate table."""
        response = client.post("/api/v1/pricing/tax", json={"amount": "100", "address": {"state": "ca"}})

        assert response.status_code == 200
        data = response.json()
        assert Decimal(data["tax_rate"]) == Decimal("0.0875")
        assert Decimal(data["tax"]) == Decimal("8.75")

    def test_unknown_state_uses_default_rate(self, client: TestClient) -> None:
        """Test that an unlisted state falls back to the default rate."""
        response = client.post("/api/v1/pricing/tax", json={"amount": "100", "address": {"state": "OR"}})

        assert response.status_code == 200
        assert Decimal(response.json()["tax"]) == Decimal("0")

    def test_tax_comes_from_pricing_service(self, client: TestClient) -> None:
        """Test that the endpoint reports the tax computed by calculate_tax."""
        with patch("enhanced_commerce.api.routes.pricing.calculate_tax", return_value=Decimal("1.23")) as calculate_tax:
            response = client.post("/api/v1/pricing/tax", json={"amount": "19.99", "address": {"state": "NY"}})

        assert response.status_code == 200
        assert Decimal(response.json()["tax"]) == Decimal("1.23")
        calculate_tax.assert_called_once()
        assert calculate_tax.call_args.args[0] == Decimal("19.99")
        assert calculate_tax.call_args.args[1].state == "NY"


class TestValidateDiscount:
    """Tests for POST /api/v1/discounts/validate."""

    def test_valid_code(self, client: TestClient) -> None:
        """Test that an applicable code is accepted."""
        response = client.post(
            "/api/v1/discounts/validate",
            json={"discount_code": DISCOUNT_CODE, "cart": {"line_items": [{"unit_price": "10", "quantity": 1}]}},
        )

        assert response.status_code == 200
        assert response.json() == {"valid": True}

    def test_rejection_is_returned_not_raised(self, client: TestClient) -> None:
        """Test that a rejected code returns 200 with the reason."""
        response = client.post(
            "/api/v1/discounts/validate",
            json={
                "discount_code": {**DISCOUNT_CODE, "minimum_order": "50"},
                "cart": {"line_items": [{"unit_price": "10", "quantity": 1}]},
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["valid"] is False
        assert data["reason"] == "minimum_order_not_met"
        assert data["message"] == "Minimum order amount of $50 required"

    def test_customer_restriction(self, client: TestClient) -> None:
        """Test that the customer ID is checked against the allowed list."""
        code = {**DISCOUNT_CODE, "customer_restrictions": {"allowed_customer_ids": ["customer-1"]}}

        response = client.post(
            "/api/v1/discounts/validate",
            json={"discount_code": code, "cart": {}, "customer_id": "customer-2"},
        )

        assert response.json()["reason"] == "customer_not_eligible"

    def test_inactive_code(self, client: TestClient) -> None:
        """Test that an inactive code is rejected as inactive."""
        response = client.post(
            "/api/v1/discounts/validate",
            json={"discount_code": {**DISCOUNT_CODE, "active": False}, "cart": {}},
        )

        assert response.json()["reason"] == "inactive"
