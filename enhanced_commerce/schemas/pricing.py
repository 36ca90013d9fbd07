"""Pricing Pydantic schemas for line items and order totals."""

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field

from enhanced_commerce.schemas.customer import Address
from enhanced_commerce.schemas.discount import DiscountCode


License = Literal["desktop", "web", "app", "epub", "server"]


class LineItem(BaseModel):
    """A priced catalogue entry. Immutable once priced."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    unit_price: Decimal = Field(ge=0, description="Price per unit")
    quantity: int = Field(ge=1, description="Number of units")
    typeface_id: str | None = Field(default=None, description="Referenced typeface document ID")
    selected_font_ids: tuple[str, ...] = Field(default=(), description="Referenced font document IDs")
    selected_collection_ids: tuple[str, ...] = Field(default=(), description="Referenced collection document IDs")
    selected_licenses: tuple[License, ...] = Field(default=(), description="Licenses purchased for the item")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_price(self) -> Decimal:
        """Line contribution to the subtotal."""
        return self.unit_price * self.quantity


class AdditionalLineItem(BaseModel):
    """Free-form line item carrying its own precomputed total."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    title: str = Field(min_length=1, description="Line item title")
    description: str | None = Field(default=None, description="Optional description")
    quantity: int = Field(default=1, ge=1, description="Number of units")
    unit_price: Decimal = Field(ge=0, description="Price per unit")
    total_price: Decimal = Field(ge=0, description="Precomputed line total")


class OrderTotals(BaseModel):
    """Subtotal, discount, tax and total of an order.

    Amounts are not range-checked here; only ``total`` is guaranteed
    non-negative by the calculator.
    """

    model_config = ConfigDict(from_attributes=True, frozen=True)

    subtotal: Decimal = Field(default=Decimal("0"), description="Sum of all line totals")
    discount: Decimal = Field(default=Decimal("0"), description="Discount deducted from the subtotal")
    tax: Decimal = Field(default=Decimal("0"), description="Tax on the discounted amount")
    total: Decimal = Field(default=Decimal("0"), description="Amount due, never negative")


class PricingRequest(BaseModel):
    """Request schema for POST /pricing/totals."""

    line_items: list[LineItem] = Field(default_factory=list, description="Catalogue line items")
    additional_line_items: list[AdditionalLineItem] = Field(
        default_factory=list, description="Additional line items with precomputed totals"
    )
    discount_code: DiscountCode | None = Field(default=None, description="Discount code to apply")
    tax_rate: Decimal | None = Field(
        default=None,
        ge=0,
        description="Tax rate; derived from the address (or the configured default) when omitted",
    )
    address: Address | None = Field(default=None, description="Address used for regional tax lookup")


class TaxRequest(BaseModel):
    """Request schema for POST /pricing/tax."""

    amount: Decimal = Field(ge=0, description="Taxable amount")
    address: Address | None = Field(default=None, description="Customer address")


class TaxResponse(BaseModel):
    """Response schema for regional tax lookups."""

    amount: Decimal = Field(description="Taxable amount")
    tax_rate: Decimal = Field(description="Rate applied")
    tax: Decimal = Field(description="Tax due")
