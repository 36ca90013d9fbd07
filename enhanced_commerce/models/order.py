"""Order model type definitions for document store operations."""

from datetime import datetime
from typing import Literal, TypedDict


# Enumerations shared with the document store; values are part of the stored contract
OrderKind = Literal["regular", "renewal"]
OrderStatus = Literal["pending", "processing", "completed", "cancelled", "refunded"]
PaymentStatus = Literal["pending", "paid", "failed", "refunded", "partially_refunded"]
FulfillmentStatus = Literal["not_fulfilled", "partially_fulfilled", "fulfilled"]


class OrderItemRow(TypedDict, total=False):
    """Structure for a single priced item in an order.

    Stored as part of the items JSONB array.
    """

    typeface_id: str | None
    selected_font_ids: list[str]
    selected_collection_ids: list[str]
    selected_licenses: list[str]
    quantity: int
    unit_price: str
    total_price: str


class AdditionalLineItemRow(TypedDict, total=False):
    """Free-form line item with a precomputed total."""

    title: str
    description: str | None
    quantity: int
    unit_price: str
    total_price: str


class PricingRow(TypedDict):
    """Order pricing block. Amounts are stored as decimal strings."""

    subtotal: str
    discount: str
    tax: str
    total: str


class RenewalInfoRow(TypedDict, total=False):
    """Renewal metadata stored on renewal orders."""

    effective_date: str | None
    superseded_order_number: str | None
    renewal_period: int | None


class PaymentInfoRow(TypedDict, total=False):
    """Payment details attached at checkout."""

    method: str | None
    transaction_id: str | None
    paid_at: str | None


class OrderRow(TypedDict, total=False):
    """Orders table row representation.

    Maps directly to the document shape persisted by the store.
    """

    id: str
    order_number: str
    order_type: OrderKind
    original_order_id: str | None
    renewal_info: RenewalInfoRow | None
    customer_id: str | None
    items: list[OrderItemRow]
    additional_line_items: list[AdditionalLineItemRow]
    pricing: PricingRow
    discount_code_id: str | None
    status: OrderStatus
    payment_status: PaymentStatus
    payment_info: PaymentInfoRow | None
    fulfillment_status: FulfillmentStatus
    notes: str | None
    created_at: datetime | str
    updated_at: datetime | str
