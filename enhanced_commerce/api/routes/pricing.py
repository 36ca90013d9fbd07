"""Pricing API routes."""

from fastapi import APIRouter

from enhanced_commerce.api.deps import AppSettings
from enhanced_commerce.schemas.pricing import OrderTotals, PricingRequest, TaxRequest, TaxResponse
from enhanced_commerce.services.pricing_service import calculate_tax, compute_totals, tax_rate_for_address

router = APIRouter(prefix="/pricing", tags=["pricing"])


@router.post(
    "/totals",
    response_model=OrderTotals,
    summary="Calculate order totals",
    description="Computes subtotal, discount, tax and total for line items and an optional discount code.",
)
async def calculate_totals(request: PricingRequest, settings: AppSettings) -> OrderTotals:
    """Calculate order totals.

    The discount code is applied as given; use /discounts/validate to
    check whether it may be applied at all. When no tax rate is passed
    the rate is looked up from the address.

    Args:
        request: Line items, discount code and tax inputs.
        settings: Application settings (regional tax rates).

    Returns:
        OrderTotals: Computed totals.
    """
    tax_rate = request.tax_rate
    if tax_rate is None:
        tax_rate = tax_rate_for_address(request.address, settings.tax_rates, settings.default_tax_rate)

    return compute_totals(
        request.line_items,
        request.additional_line_items,
        request.discount_code,
        tax_rate,
    )


@router.post(
    "/tax",
    response_model=TaxResponse,
    summary="Calculate regional tax",
    description="Looks up the tax rate for an address and applies it to an amount.",
)
async def calculate_regional_tax(request: TaxRequest, settings: AppSettings) -> TaxResponse:
    """Calculate tax due on an amount for an address."""
    tax_rate = tax_rate_for_address(request.address, settings.tax_rates, settings.default_tax_rate)
    tax = calculate_tax(request.amount, request.address, settings.tax_rates, settings.default_tax_rate)
    return TaxResponse(amount=request.amount, tax_rate=tax_rate, tax=tax)
