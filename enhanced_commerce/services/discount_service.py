"""Discount code applicability checks."""

import logging
from datetime import datetime, timezone
from typing import Protocol

from enhanced_commerce.schemas.cart import Cart
from enhanced_commerce.schemas.discount import DiscountCode, DiscountRejection, DiscountValidation
from enhanced_commerce.services.pricing_service import calculate_subtotal

logger = logging.getLogger(__name__)


class CustomerOrderHistory(Protocol):
    """Looks up a customer's order history in the store."""

    async def has_prior_completed_orders(self, customer_id: str) -> bool: ...


def validate_discount_code(
    discount_code: DiscountCode,
    cart: Cart,
    customer_id: str | None = None,
    now: datetime | None = None,
) -> DiscountValidation:
    """Decide whether a discount code may be applied to a cart.

    Checks run in a fixed order and the first failure is reported, so the
    message a customer sees is deterministic. A code restricted to
    specific customers rejects callers that do not identify themselves.

    The first-time-customer restriction needs order history and is not
    evaluated here; see check_first_time_customer().

    Nothing is mutated. Redemption (the usage counter) happens in the
    store and must re-check the limit atomically.

    Args:
        discount_code: The code being redeemed.
        cart: Cart the code would apply to.
        customer_id: Customer redeeming the code, if known.
        now: Evaluation time; defaults to the current UTC time.

    Returns:
        DiscountValidation: Accepted, or rejected with a reason.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    if not discount_code.active:
        return DiscountValidation.rejected(DiscountRejection.INACTIVE, "Discount code is inactive")

    if now < discount_code.valid_from:
        return DiscountValidation.rejected(DiscountRejection.NOT_YET_VALID, "Discount code is not yet valid")

    if now > discount_code.valid_until:
        return DiscountValidation.rejected(DiscountRejection.EXPIRED, "Discount code has expired")

    if discount_code.usage_limit is not None and discount_code.usage_count >= discount_code.usage_limit:
        return DiscountValidation.rejected(
            DiscountRejection.USAGE_LIMIT_REACHED, "Discount code usage limit reached"
        )

    if discount_code.minimum_order is not None:
        subtotal = calculate_subtotal(cart.line_items, cart.additional_line_items)
        if subtotal < discount_code.minimum_order:
            return DiscountValidation.rejected(
                DiscountRejection.MINIMUM_ORDER_NOT_MET,
                f"Minimum order amount of ${discount_code.minimum_order} required",
            )

    restrictions = discount_code.customer_restrictions
    if restrictions is not None and restrictions.allowed_customer_ids:
        if customer_id is None or customer_id not in restrictions.allowed_customer_ids:
            return DiscountValidation.rejected(
                DiscountRejection.CUSTOMER_NOT_ELIGIBLE, "Discount code not available for this customer"
            )

    return DiscountValidation.accepted()


async def check_first_time_customer(
    discount_code: DiscountCode,
    customer_id: str | None,
    history: CustomerOrderHistory,
) -> DiscountValidation:
    """Enforce a code's first-time-customer restriction.

    Run after validate_discount_code() has accepted the code. Anonymous
    callers cannot prove they are new and are rejected.
    """
    restrictions = discount_code.customer_restrictions
    if restrictions is None or not restrictions.first_time_only:
        return DiscountValidation.accepted()

    if customer_id is None or await history.has_prior_completed_orders(customer_id):
        logger.info(
            "Discount code %s refused: customer %s is not a first-time customer", discount_code.code, customer_id
        )
        return DiscountValidation.rejected(
            DiscountRejection.FIRST_TIME_ONLY, "Discount code is only available to first-time customers"
        )

    return DiscountValidation.accepted()
