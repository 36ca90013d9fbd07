"""Checkout and order API routes."""

import logging

from fastapi import APIRouter, status

from enhanced_commerce.api.deps import CheckoutServiceDep
from enhanced_commerce.api.middleware.error_handler import ConflictError, NotFoundError, ValidationError
from enhanced_commerce.schemas.checkout import CheckoutRequest
from enhanced_commerce.schemas.common import ErrorDetail
from enhanced_commerce.schemas.order import Order, RenewalEligibility, RenewalRequest
from enhanced_commerce.services.checkout_service import DiscountRejectedError
from enhanced_commerce.services.commerce_store import CartClaimError, DiscountRedemptionError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/checkout", tags=["checkout"])


@router.post(
    "",
    response_model=Order,
    status_code=status.HTTP_201_CREATED,
    summary="Check out a cart",
    description="Prices a stored cart, redeems its discount code and creates a pending order.",
)
async def checkout_cart(data: CheckoutRequest, service: CheckoutServiceDep) -> Order:
    """Convert a stored cart into an order.

    Args:
        data: Cart ID, optional discount code and payment details.
        service: Checkout service.

    Returns:
        Order: The created order.

    Raises:
        NotFoundError: 404 if the cart does not exist.
        ValidationError: 422 if the discount code cannot be applied or
            the cart was already checked out.
        ConflictError: 409 if a concurrent checkout took the cart or the
            last use of the discount code.
    """
    try:
        return await service.checkout(data)
    except LookupError as e:
        raise NotFoundError(str(e)) from e
    except DiscountRejectedError as e:
        raise ValidationError(str(e), details=[ErrorDetail.from_validation("discount_code", e.validation)]) from e
    except (CartClaimError, DiscountRedemptionError) as e:
        raise ConflictError(str(e)) from e
    except ValueError as e:
        raise ValidationError(str(e)) from e


# Orders router - mounted separately at /orders
orders_router = APIRouter(prefix="/orders", tags=["orders"])


@orders_router.get(
    "/{order_id}",
    response_model=Order,
    summary="Get order by ID",
)
async def get_order(order_id: str, service: CheckoutServiceDep) -> Order:
    """Get a single order by document ID.

    Raises:
        NotFoundError: 404 if order not found.
    """
    order = await service.get_order(order_id)
    if order is None:
        raise NotFoundError("Order not found")
    return order


@orders_router.get(
    "/{order_id}/renewal-eligibility",
    response_model=RenewalEligibility,
    response_model_exclude_none=True,
    summary="Check renewal eligibility",
    description="Reports whether an order can be renewed and the recommended renewal date.",
)
async def get_renewal_eligibility(order_id: str, service: CheckoutServiceDep) -> RenewalEligibility:
    """Check whether an order can be renewed."""
    try:
        return await service.get_renewal_eligibility(order_id)
    except LookupError as e:
        raise NotFoundError(str(e)) from e


@orders_router.post(
    "/{order_id}/renewals",
    response_model=Order,
    status_code=status.HTTP_201_CREATED,
    summary="Renew an order",
    description="Creates a pending renewal order that clones the original's line items and pricing.",
)
async def renew_order(order_id: str, data: RenewalRequest, service: CheckoutServiceDep) -> Order:
    """Create a renewal of a completed order.

    Raises:
        NotFoundError: 404 if order not found.
        ValidationError: 422 if the order is not eligible for renewal.
    """
    try:
        return await service.renew_order(order_id, data)
    except LookupError as e:
        raise NotFoundError(str(e)) from e
    except ValueError as e:
        logger.info("Renewal of order %s refused: %s", order_id, e)
        raise ValidationError(str(e)) from e
