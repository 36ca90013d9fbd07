"""Cart model type definitions."""

from datetime import datetime
from typing import Literal, TypedDict

from enhanced_commerce.models.order import AdditionalLineItemRow, PricingRow


CartStatus = Literal["active", "abandoned", "converted", "expired"]


class CartItemRow(TypedDict, total=False):
    """Single cart entry. Price is the unit price."""

    typeface_id: str | None
    selected_font_ids: list[str]
    selected_collection_ids: list[str]
    selected_licenses: list[str]
    quantity: int
    price: str


class CartRenewalInfoRow(TypedDict, total=False):
    """Renewal context recorded on a cart."""

    is_renewal: bool
    effective_date: str | None
    superseded_order_number: str | None
    original_order_id: str | None


class CartCustomerRow(TypedDict, total=False):
    """Customer details captured on the cart."""

    first_name: str
    last_name: str
    email: str
    company: str | None
    address: dict[str, str | None] | None


class CartRow(TypedDict, total=False):
    """Carts table row representation."""

    id: str
    session_id: str | None
    items: list[CartItemRow]
    renewal_info: CartRenewalInfoRow | None
    additional_line_items: list[AdditionalLineItemRow]
    discount_code_id: str | None
    customer: CartCustomerRow | None
    totals: PricingRow | None
    expires_at: datetime | str | None
    status: CartStatus
    created_at: datetime | str
