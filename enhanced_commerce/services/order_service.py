"""Order lifecycle: checkout conversion, renewal derivation and eligibility."""

import logging
import uuid
from datetime import date, datetime, timezone

from enhanced_commerce.schemas.cart import Cart
from enhanced_commerce.schemas.order import (
    CheckoutInfo,
    Order,
    PaymentInfo,
    RenewalEligibility,
    RenewalInfo,
    RenewalRequest,
)
from enhanced_commerce.services.pricing_service import compute_totals

logger = logging.getLogger(__name__)

ORDER_PREFIX = "ORD"
RENEWAL_PREFIX = "REN"
DEFAULT_RENEWAL_PERIOD = 1


def generate_order_number(prefix: str = ORDER_PREFIX, now: datetime | None = None) -> str:
    """Generate a human-readable order number.

    Format is ``<PREFIX>-<epoch milliseconds>-<8 hex chars>``. The random
    suffix comes from uuid4; the store's unique constraint on
    order_number remains the final guard against collisions.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    millis = int(now.timestamp() * 1000)
    return f"{prefix}-{millis}-{uuid.uuid4().hex[:8].upper()}"


def cart_to_order(
    cart: Cart,
    checkout_info: CheckoutInfo,
    now: datetime | None = None,
    prefix: str = ORDER_PREFIX,
) -> Order:
    """Build a new order from a cart at checkout.

    Totals are copied from the cart as-is; price the cart with
    compute_totals() before calling this.

    Args:
        cart: The cart being checked out. Not modified.
        checkout_info: Payment and customer details.
        now: Checkout time, used for the order number and paid_at.
        prefix: Prefix for generated order numbers.

    Returns:
        Order: A pending, unfulfilled order.
    """
    if now is None:
        now = datetime.now(timezone.utc)

    renewal = cart.renewal_context if cart.renewal_context and cart.renewal_context.is_renewal else None
    payment_status = checkout_info.payment_status or "pending"

    payment_info = None
    if checkout_info.payment_method or checkout_info.transaction_id:
        payment_info = PaymentInfo(
            method=checkout_info.payment_method,
            transaction_id=checkout_info.transaction_id,
            paid_at=now if payment_status == "paid" else None,
        )

    order = Order(
        order_number=checkout_info.order_number or generate_order_number(prefix, now),
        order_kind="renewal" if renewal else "regular",
        original_order_ref=renewal.original_order_ref if renewal else None,
        renewal_info=(
            RenewalInfo(
                effective_date=renewal.effective_date,
                superseded_order_number=renewal.superseded_order_number,
            )
            if renewal
            else None
        ),
        customer_ref=checkout_info.customer_id,
        line_items=cart.line_items,
        additional_line_items=cart.additional_line_items,
        totals=cart.totals,
        discount_code_ref=cart.applied_discount_code,
        status="pending",
        payment_status=payment_status,
        payment_info=payment_info,
        fulfillment_status="not_fulfilled",
    )

    logger.debug("Built %s order %s from cart %s", order.order_kind, order.order_number, cart.id)
    return order


def create_renewal_order(
    original_order: Order,
    renewal_request: RenewalRequest,
    now: datetime | None = None,
    prefix: str = RENEWAL_PREFIX,
    default_period: int = DEFAULT_RENEWAL_PERIOD,
) -> Order:
    """Derive a renewal order from an earlier order.

    Line items and totals are cloned from the original. When the request
    supplies replacement line items they are re-priced with the request's
    tax rate; no discount carries over to a re-priced renewal. Statuses
    start over since a renewal is a new billing event.

    Args:
        original_order: Order being renewed. Not modified.
        renewal_request: Renewal options and overrides.
        now: Creation time, used for the order number.
        prefix: Prefix for generated order numbers.
        default_period: Renewal period when the request has none.

    Returns:
        Order: A pending renewal order.
    """
    if renewal_request.line_items is not None:
        line_items = tuple(renewal_request.line_items)
        additional_line_items = ()
        totals = compute_totals(line_items, tax_rate=renewal_request.tax_rate)
        discount_code_ref = None
    else:
        line_items = original_order.line_items
        additional_line_items = original_order.additional_line_items
        totals = original_order.totals
        discount_code_ref = original_order.discount_code_ref

    return Order(
        order_number=renewal_request.order_number or generate_order_number(prefix, now),
        order_kind="renewal",
        original_order_ref=original_order.id,
        renewal_info=RenewalInfo(
            effective_date=renewal_request.effective_date,
            superseded_order_number=renewal_request.superseded_order_number or original_order.order_number,
            renewal_period=renewal_request.renewal_period or default_period,
        ),
        customer_ref=renewal_request.customer_id or original_order.customer_ref,
        line_items=line_items,
        additional_line_items=additional_line_items,
        totals=totals,
        discount_code_ref=discount_code_ref,
        status="pending",
        payment_status="pending",
        fulfillment_status="not_fulfilled",
    )


def _ineligibility_reason(order: Order) -> str | None:
    # Checked in this order; the first failure is reported
    if order.status != "completed":
        return "Order must be completed"
    if order.fulfillment_status != "fulfilled":
        return "Order must be fulfilled"
    if order.order_kind == "renewal":
        return "Renewal orders cannot be renewed"
    if order.payment_status != "paid":
        return "Payment must be completed"
    return None


def is_renewable(order: Order) -> bool:
    """Whether an order is completed, fulfilled, paid and not itself a renewal."""
    return _ineligibility_reason(order) is None


def add_one_year(day: date) -> date:
    """Same calendar date one year later; Feb 29 maps to Feb 28."""
    try:
        return day.replace(year=day.year + 1)
    except ValueError:
        return day.replace(year=day.year + 1, day=28)


def renewal_eligibility(order: Order, today: date | None = None) -> RenewalEligibility:
    """Report whether an order can be renewed and the recommended date.

    The recommended date is exactly one year after the order was created.
    Orders without a creation timestamp are dated from ``today``.
    """
    reason = _ineligibility_reason(order)
    if reason is not None:
        return RenewalEligibility(eligible=False, reason=reason)

    created_at = order.created_at
    if created_at is not None:
        if created_at.tzinfo is not None:
            created_at = created_at.astimezone(timezone.utc)
        order_date = created_at.date()
    else:
        order_date = today or datetime.now(timezone.utc).date()

    return RenewalEligibility(eligible=True, recommended_date=add_one_year(order_date))
