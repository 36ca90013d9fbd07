"""Document store access for carts, orders and discount codes.

Converts between stored rows (see enhanced_commerce.models) and the
Pydantic schemas the pricing and lifecycle functions work on.
"""

import logging
from decimal import Decimal
from typing import Any

from supabase import Client

from enhanced_commerce.core.supabase import get_supabase_client
from enhanced_commerce.models.cart import CartRow
from enhanced_commerce.models.discount_code import DiscountCodeRow
from enhanced_commerce.models.order import OrderRow, PricingRow
from enhanced_commerce.schemas.cart import Cart, RenewalContext
from enhanced_commerce.schemas.customer import CustomerInfo
from enhanced_commerce.schemas.discount import CustomerRestrictions, DiscountCode
from enhanced_commerce.schemas.order import Order, PaymentInfo, RenewalInfo
from enhanced_commerce.schemas.pricing import AdditionalLineItem, LineItem, OrderTotals

logger = logging.getLogger(__name__)


class DiscountRedemptionError(Exception):
    """A discount code could not be redeemed (limit reached or lost race)."""


class CartClaimError(Exception):
    """A cart is no longer active, typically because another checkout took it."""


def _line_item_from_row(row: dict[str, Any]) -> LineItem:
    # Cart items store the unit price as "price", order items as "unit_price"
    return LineItem(
        unit_price=row.get("unit_price", row.get("price", 0)),
        quantity=row["quantity"],
        typeface_id=row.get("typeface_id"),
        selected_font_ids=tuple(row.get("selected_font_ids") or ()),
        selected_collection_ids=tuple(row.get("selected_collection_ids") or ()),
        selected_licenses=tuple(row.get("selected_licenses") or ()),
    )


def _line_item_to_row(item: LineItem) -> dict[str, Any]:
    return {
        "typeface_id": item.typeface_id,
        "selected_font_ids": list(item.selected_font_ids),
        "selected_collection_ids": list(item.selected_collection_ids),
        "selected_licenses": list(item.selected_licenses),
        "quantity": item.quantity,
        "unit_price": str(item.unit_price),
        "total_price": str(item.total_price),
    }


def _additional_item_to_row(item: AdditionalLineItem) -> dict[str, Any]:
    return {
        "title": item.title,
        "description": item.description,
        "quantity": item.quantity,
        "unit_price": str(item.unit_price),
        "total_price": str(item.total_price),
    }


def totals_from_row(row: dict[str, Any] | None) -> OrderTotals:
    if not row:
        return OrderTotals()
    return OrderTotals(**{key: Decimal(str(row.get(key) or 0)) for key in ("subtotal", "discount", "tax", "total")})


def _totals_to_row(totals: OrderTotals) -> PricingRow:
    return {
        "subtotal": str(totals.subtotal),
        "discount": str(totals.discount),
        "tax": str(totals.tax),
        "total": str(totals.total),
    }


def order_from_row(row: OrderRow) -> Order:
    """Build an Order from a stored orders row."""
    renewal_info = row.get("renewal_info")
    payment_info = row.get("payment_info")
    return Order(
        id=row.get("id"),
        order_number=row["order_number"],
        order_kind=row.get("order_type") or "regular",
        original_order_ref=row.get("original_order_id"),
        renewal_info=RenewalInfo(**renewal_info) if renewal_info else None,
        customer_ref=row.get("customer_id"),
        line_items=tuple(_line_item_from_row(item) for item in row.get("items") or ()),
        additional_line_items=tuple(
            AdditionalLineItem(**item) for item in row.get("additional_line_items") or ()
        ),
        totals=totals_from_row(row.get("pricing")),
        discount_code_ref=row.get("discount_code_id"),
        status=row.get("status") or "pending",
        payment_status=row.get("payment_status") or "pending",
        payment_info=PaymentInfo(**payment_info) if payment_info else None,
        fulfillment_status=row.get("fulfillment_status") or "not_fulfilled",
        notes=row.get("notes"),
        created_at=row.get("created_at"),
    )


def order_to_row(order: Order) -> OrderRow:
    """Serialize an Order for insertion. Store-assigned fields are omitted."""
    row: OrderRow = {
        "order_number": order.order_number,
        "order_type": order.order_kind,
        "original_order_id": order.original_order_ref,
        "renewal_info": order.renewal_info.model_dump(mode="json") if order.renewal_info else None,
        "customer_id": order.customer_ref,
        "items": [_line_item_to_row(item) for item in order.line_items],
        "additional_line_items": [_additional_item_to_row(item) for item in order.additional_line_items],
        "pricing": _totals_to_row(order.totals),
        "discount_code_id": order.discount_code_ref,
        "status": order.status,
        "payment_status": order.payment_status,
        "payment_info": order.payment_info.model_dump(mode="json") if order.payment_info else None,
        "fulfillment_status": order.fulfillment_status,
        "notes": order.notes,
    }
    if order.id is not None:
        row["id"] = order.id
    return row


def cart_from_row(row: CartRow) -> Cart:
    """Build a Cart from a stored carts row."""
    renewal = row.get("renewal_info")
    customer = row.get("customer")
    return Cart(
        id=row.get("id"),
        session_id=row.get("session_id"),
        line_items=tuple(_line_item_from_row(item) for item in row.get("items") or ()),
        additional_line_items=tuple(
            AdditionalLineItem(**item) for item in row.get("additional_line_items") or ()
        ),
        applied_discount_code=row.get("discount_code_id"),
        customer=CustomerInfo(**customer) if customer else None,
        totals=totals_from_row(row.get("totals")),
        renewal_context=(
            RenewalContext(
                is_renewal=bool(renewal.get("is_renewal")),
                effective_date=renewal.get("effective_date"),
                superseded_order_number=renewal.get("superseded_order_number"),
                original_order_ref=renewal.get("original_order_id"),
            )
            if renewal
            else None
        ),
        status=row.get("status") or "active",
        expires_at=row.get("expires_at"),
    )


def discount_code_from_row(row: DiscountCodeRow) -> DiscountCode:
    """Build a DiscountCode from a stored discount_codes row."""
    restrictions = row.get("customer_restrictions")
    return DiscountCode(
        id=row.get("id"),
        code=row["code"],
        description=row.get("description"),
        kind=row["type"],
        value=row["value"],
        minimum_order=row.get("minimum_order"),
        maximum_discount=row.get("maximum_discount"),
        valid_from=row["valid_from"],
        valid_until=row["valid_until"],
        usage_limit=row.get("usage_limit"),
        usage_count=row.get("usage_count") or 0,
        active=bool(row.get("active")),
        customer_restrictions=(
            CustomerRestrictions(
                allowed_customer_ids=frozenset(restrictions.get("specific_customer_ids") or ()),
                first_time_only=bool(restrictions.get("first_time_customers_only")),
            )
            if restrictions
            else None
        ),
    )


class CommerceStore:
    """Reads and writes commerce documents in the hosted store."""

    def __init__(self, client: Client | None = None) -> None:
        """Initialize the store.

        Args:
            client: Optional Supabase client for testing.
        """
        self.client = client or get_supabase_client()

    async def get_order(self, order_id: str) -> Order | None:
        """Get an order by document ID.

        Args:
            order_id: The order's document ID.

        Returns:
            Order | None: The order or None if not found.
        """
        response = (
            self.client.table("orders")
            .select("*")
            .eq("id", order_id)
            .maybe_single()
            .execute()
        )
        return order_from_row(response.data) if response and response.data else None

    async def get_cart(self, cart_id: str) -> Cart | None:
        """Get a cart by document ID."""
        response = (
            self.client.table("carts")
            .select("*")
            .eq("id", cart_id)
            .maybe_single()
            .execute()
        )
        return cart_from_row(response.data) if response and response.data else None

    async def get_discount_code(self, discount_code_id: str) -> DiscountCode | None:
        """Get a discount code by document ID."""
        response = (
            self.client.table("discount_codes")
            .select("*")
            .eq("id", discount_code_id)
            .maybe_single()
            .execute()
        )
        return discount_code_from_row(response.data) if response and response.data else None

    async def get_discount_code_by_code(self, code: str) -> DiscountCode | None:
        """Get a discount code by the code customers enter."""
        response = (
            self.client.table("discount_codes")
            .select("*")
            .eq("code", code)
            .maybe_single()
            .execute()
        )
        return discount_code_from_row(response.data) if response and response.data else None

    async def insert_order(self, order: Order) -> Order:
        """Persist a new order.

        Args:
            order: The order to insert.

        Returns:
            Order: The stored order, including its ID and creation time.
        """
        response = self.client.table("orders").insert(order_to_row(order)).execute()
        stored = order_from_row(response.data[0])
        logger.info("Order %s stored with id %s", stored.order_number, stored.id)
        return stored

    async def claim_cart(self, cart_id: str) -> None:
        """Mark an active cart as converted, once.

        The update only matches while the cart is still active, so of two
        concurrent checkouts of the same cart exactly one gets it.

        Raises:
            CartClaimError: If the cart is no longer active.
        """
        response = (
            self.client.table("carts")
            .update({"status": "converted"})
            .eq("id", cart_id)
            .eq("status", "active")
            .execute()
        )
        if not response.data:
            logger.warning("Cart %s was already claimed by another checkout", cart_id)
            raise CartClaimError("Cart has already been checked out")

    async def release_cart(self, cart_id: str) -> None:
        """Return a claimed cart to active after a failed checkout."""
        (
            self.client.table("carts")
            .update({"status": "active"})
            .eq("id", cart_id)
            .eq("status", "converted")
            .execute()
        )

    async def has_prior_completed_orders(self, customer_id: str) -> bool:
        """Check whether the customer has any completed order."""
        response = (
            self.client.table("orders")
            .select("id")
            .eq("customer_id", customer_id)
            .eq("status", "completed")
            .limit(1)
            .execute()
        )
        return bool(response.data)

    async def redeem_discount_code(self, discount_code: DiscountCode) -> DiscountCode:
        """Atomically increment a discount code's usage counter.

        The update only matches while usage_count still holds the value
        the caller read, so two concurrent checkouts cannot both redeem
        the last use.

        Args:
            discount_code: The code as read before checkout.

        Returns:
            DiscountCode: The code with its new usage count.

        Raises:
            DiscountRedemptionError: If the limit is reached or another
                checkout redeemed the code first.
        """
        new_count = discount_code.usage_count + 1
        if discount_code.usage_limit is not None and new_count > discount_code.usage_limit:
            raise DiscountRedemptionError("Discount code usage limit reached")

        response = (
            self.client.table("discount_codes")
            .update({"usage_count": new_count})
            .eq("id", discount_code.id)
            .eq("usage_count", discount_code.usage_count)
            .execute()
        )
        if not response.data:
            logger.warning("Concurrent redemption of discount code %s", discount_code.code)
            raise DiscountRedemptionError("Discount code was redeemed by another checkout, please retry")

        return discount_code.model_copy(update={"usage_count": new_count})

    async def list_recent_orders(self, limit: int) -> list[dict[str, Any]]:
        """Get the most recent order rows, newest first."""
        response = (
            self.client.table("orders")
            .select("id, order_number, order_type, customer_id, pricing, status, created_at")
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return response.data or []

    async def count(self, table: str, **filters: str) -> int:
        """Count rows in a table matching equality filters."""
        query = self.client.table(table).select("id", count="exact")
        for column, value in filters.items():
            query = query.eq(column, value)
        response = query.limit(1).execute()
        return response.count or 0

    async def completed_order_totals(self) -> list[Decimal]:
        """Totals of all completed orders."""
        response = (
            self.client.table("orders")
            .select("pricing")
            .eq("status", "completed")
            .execute()
        )
        return [totals_from_row(row.get("pricing")).total for row in response.data or []]

    async def customer_emails(self, customer_ids: list[str]) -> dict[str, str]:
        """Map customer IDs to email addresses."""
        if not customer_ids:
            return {}
        response = (
            self.client.table("customers")
            .select("id, email")
            .in_("id", customer_ids)
            .execute()
        )
        return {row["id"]: row.get("email") for row in response.data or []}

