"""Order Pydantic schemas for lifecycle operations and API responses."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from enhanced_commerce.models.order import FulfillmentStatus, OrderKind, OrderStatus, PaymentStatus
from enhanced_commerce.schemas.pricing import AdditionalLineItem, LineItem, OrderTotals


class RenewalInfo(BaseModel):
    """Renewal metadata carried on renewal orders."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    effective_date: date | None = Field(default=None, description="Date the renewal takes effect")
    superseded_order_number: str | None = Field(default=None, description="Order number being superseded")
    renewal_period: int | None = Field(default=None, ge=1, description="Renewal period in years")


class PaymentInfo(BaseModel):
    """Payment details recorded at checkout."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    method: str | None = Field(default=None, description="Payment method")
    transaction_id: str | None = Field(default=None, description="Payment provider transaction ID")
    paid_at: datetime | None = Field(default=None, description="When the payment was captured")


class Order(BaseModel):
    """Persisted record of a purchase.

    Built once at checkout or renewal time; payment and fulfillment
    workflows outside this service update it afterwards.
    """

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: str | None = Field(default=None, description="Document ID, assigned by the store")
    order_number: str = Field(description="Human-readable unique order number")
    order_kind: OrderKind = Field(default="regular", description="regular or renewal")
    original_order_ref: str | None = Field(default=None, description="Document ID of the renewed order")
    renewal_info: RenewalInfo | None = Field(default=None, description="Renewal metadata")
    customer_ref: str | None = Field(default=None, description="Document ID of the customer")
    line_items: tuple[LineItem, ...] = Field(default=(), description="Catalogue line items")
    additional_line_items: tuple[AdditionalLineItem, ...] = Field(default=(), description="Additional line items")
    totals: OrderTotals = Field(default_factory=OrderTotals, description="Order pricing")
    discount_code_ref: str | None = Field(default=None, description="Document ID of the applied discount code")
    status: OrderStatus = Field(default="pending", description="Order status")
    payment_status: PaymentStatus = Field(default="pending", description="Payment status")
    payment_info: PaymentInfo | None = Field(default=None, description="Payment details")
    fulfillment_status: FulfillmentStatus = Field(default="not_fulfilled", description="Fulfillment status")
    notes: str | None = Field(default=None, description="Internal notes")
    created_at: datetime | None = Field(default=None, description="Creation timestamp, assigned by the store")


class CheckoutInfo(BaseModel):
    """Checkout details supplied alongside a cart."""

    model_config = ConfigDict(frozen=True)

    payment_status: PaymentStatus | None = Field(default=None, description="Payment status; defaults to pending")
    payment_method: str | None = Field(default=None, description="Payment method")
    transaction_id: str | None = Field(default=None, description="Payment provider transaction ID")
    order_number: str | None = Field(default=None, description="Explicit order number")
    customer_id: str | None = Field(default=None, description="Document ID of the customer")


class RenewalRequest(BaseModel):
    """Options for deriving a renewal order from an earlier order."""

    model_config = ConfigDict(frozen=True)

    effective_date: date | None = Field(default=None, description="Date the renewal takes effect")
    superseded_order_number: str | None = Field(
        default=None, description="Order number superseded; defaults to the original's"
    )
    renewal_period: int | None = Field(default=None, ge=1, description="Renewal period in years; defaults to 1")
    customer_id: str | None = Field(default=None, description="Customer override; defaults to the original's")
    order_number: str | None = Field(default=None, description="Explicit order number")
    line_items: list[LineItem] | None = Field(
        default=None, description="Replacement line items; the original's are cloned when omitted"
    )
    tax_rate: Decimal = Field(default=Decimal("0"), ge=0, description="Tax rate for re-priced line items")


class RenewalEligibility(BaseModel):
    """Whether an order can be renewed, and when."""

    model_config = ConfigDict(frozen=True)

    eligible: bool = Field(description="Whether the order can be renewed")
    reason: str | None = Field(default=None, description="First failing condition when ineligible")
    recommended_date: date | None = Field(default=None, description="Suggested renewal date")
