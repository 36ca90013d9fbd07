"""Cart Pydantic schemas."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from enhanced_commerce.models.cart import CartStatus
from enhanced_commerce.schemas.customer import CustomerInfo
from enhanced_commerce.schemas.pricing import AdditionalLineItem, LineItem, OrderTotals


class RenewalContext(BaseModel):
    """Marks a cart as renewing an earlier order."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    is_renewal: bool = Field(default=False, description="Whether checkout produces a renewal order")
    effective_date: date | None = Field(default=None, description="Date the renewal takes effect")
    superseded_order_number: str | None = Field(default=None, description="Order number being renewed")
    original_order_ref: str | None = Field(default=None, description="Document ID of the order being renewed")


class Cart(BaseModel):
    """Transient pre-checkout collection of line items.

    Totals are computed upstream by the pricing calculator; a cart is
    consumed once it has been converted into an order.
    """

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: str | None = Field(default=None, description="Document ID")
    session_id: str | None = Field(default=None, description="Browser session identifier")
    line_items: tuple[LineItem, ...] = Field(default=(), description="Catalogue line items, in order")
    additional_line_items: tuple[AdditionalLineItem, ...] = Field(
        default=(), description="Additional line items, in order"
    )
    applied_discount_code: str | None = Field(default=None, description="Document ID of the applied discount code")
    customer: CustomerInfo | None = Field(default=None, description="Customer details")
    totals: OrderTotals = Field(default_factory=OrderTotals, description="Totals computed for the cart")
    renewal_context: RenewalContext | None = Field(default=None, description="Renewal context, if any")
    status: CartStatus = Field(default="active", description="Cart status")
    expires_at: datetime | None = Field(default=None, description="When the cart expires")
