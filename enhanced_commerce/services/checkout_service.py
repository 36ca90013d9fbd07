"""Checkout and renewal business logic service."""

import logging

from enhanced_commerce.core.config import Settings, get_settings
from enhanced_commerce.schemas.checkout import CheckoutRequest
from enhanced_commerce.schemas.discount import DiscountCode, DiscountValidation
from enhanced_commerce.schemas.order import Order, RenewalEligibility, RenewalRequest
from enhanced_commerce.services.commerce_store import CommerceStore
from enhanced_commerce.services.discount_service import check_first_time_customer, validate_discount_code
from enhanced_commerce.services.order_service import cart_to_order, create_renewal_order, renewal_eligibility
from enhanced_commerce.services.pricing_service import compute_totals, tax_rate_for_address

logger = logging.getLogger(__name__)


class DiscountRejectedError(ValueError):
    """A discount code failed validation at checkout."""

    def __init__(self, validation: DiscountValidation) -> None:
        self.validation = validation
        super().__init__(validation.message or "Discount code cannot be applied")


class CheckoutService:
    """Service for converting carts into orders and deriving renewals."""

    def __init__(self, store: CommerceStore | None = None, settings: Settings | None = None) -> None:
        """Initialize checkout service.

        Args:
            store: Optional commerce store for testing.
            settings: Optional settings for testing.
        """
        self.store = store or CommerceStore()
        self.settings = settings or get_settings()

    async def _resolve_discount_code(self, code: str | None, code_id: str | None) -> DiscountCode | None:
        if code:
            discount_code = await self.store.get_discount_code_by_code(code)
        elif code_id:
            discount_code = await self.store.get_discount_code(code_id)
        else:
            return None

        if discount_code is None:
            raise ValueError("Discount code not found")
        return discount_code

    async def checkout(self, request: CheckoutRequest) -> Order:
        """Price a stored cart, redeem its discount code and persist the order.

        Args:
            request: Cart ID, optional discount code and checkout details.

        Returns:
            Order: The stored order.

        Raises:
            LookupError: If the cart does not exist.
            ValueError: If the cart was already checked out or the
                discount code is unknown.
            DiscountRejectedError: If the discount code does not apply.
            CartClaimError: If a concurrent checkout converted the cart first.
            DiscountRedemptionError: If the code's last use was taken
                by a concurrent checkout.
        """
        cart = await self.store.get_cart(request.cart_id)
        if cart is None:
            raise LookupError("Cart not found")

        if cart.status != "active":
            raise ValueError(f"Cart is {cart.status} and cannot be checked out")

        customer_id = request.checkout.customer_id
        discount_code = await self._resolve_discount_code(request.discount_code, cart.applied_discount_code)

        if discount_code is not None:
            validation = validate_discount_code(discount_code, cart, customer_id)
            if validation.valid:
                validation = await check_first_time_customer(discount_code, customer_id, self.store)
            if not validation.valid:
                logger.info(
                    "Discount code %s rejected for cart %s: %s", discount_code.code, cart.id, validation.reason
                )
                raise DiscountRejectedError(validation)

        address = cart.customer.address if cart.customer else None
        tax_rate = tax_rate_for_address(address, self.settings.tax_rates, self.settings.default_tax_rate)
        totals = compute_totals(cart.line_items, cart.additional_line_items, discount_code, tax_rate)

        priced_cart = cart.model_copy(
            update={
                "totals": totals,
                "applied_discount_code": discount_code.id if discount_code else None,
            }
        )
        order = cart_to_order(priced_cart, request.checkout, prefix=self.settings.order_number_prefix)

        # Both writes below fail if a concurrent checkout got there first; no order exists yet
        await self.store.claim_cart(request.cart_id)
        try:
            if discount_code is not None:
                await self.store.redeem_discount_code(discount_code)
            stored = await self.store.insert_order(order)
        except Exception:
            await self.store.release_cart(request.cart_id)
            raise

        logger.info("Cart %s checked out as order %s (total %s)", cart.id, stored.order_number, stored.totals.total)
        return stored

    async def get_order(self, order_id: str) -> Order | None:
        """Get an order by document ID."""
        return await self.store.get_order(order_id)

    async def get_renewal_eligibility(self, order_id: str) -> RenewalEligibility:
        """Report renewal eligibility of a stored order.

        Raises:
            LookupError: If the order does not exist.
        """
        order = await self.store.get_order(order_id)
        if order is None:
            raise LookupError("Order not found")
        return renewal_eligibility(order)

    async def renew_order(self, order_id: str, renewal_request: RenewalRequest) -> Order:
        """Create and persist a renewal of a stored order.

        Only renewable orders (see is_renewable) can be renewed.

        Raises:
            LookupError: If the order does not exist.
            ValueError: If the order is not eligible for renewal.
        """
        original = await self.store.get_order(order_id)
        if original is None:
            raise LookupError("Order not found")

        eligibility = renewal_eligibility(original)
        if not eligibility.eligible:
            raise ValueError(eligibility.reason)

        renewal = create_renewal_order(
            original,
            renewal_request,
            prefix=self.settings.renewal_order_number_prefix,
            default_period=self.settings.default_renewal_period_years,
        )
        stored = await self.store.insert_order(renewal)
        logger.info("Order %s renewed as %s", original.order_number, stored.order_number)
        return stored
