"""Discount code API routes."""

from fastapi import APIRouter

from enhanced_commerce.schemas.checkout import DiscountValidationRequest
from enhanced_commerce.schemas.discount import DiscountValidation
from enhanced_commerce.services.discount_service import validate_discount_code

router = APIRouter(prefix="/discounts", tags=["discounts"])


@router.post(
    "/validate",
    response_model=DiscountValidation,
    response_model_exclude_none=True,
    summary="Validate a discount code",
    description="Checks whether a discount code may be applied to a cart. Rejections are returned, not raised.",
)
async def validate_discount(request: DiscountValidationRequest) -> DiscountValidation:
    """Validate a discount code against a cart.

    The first-time-customer restriction is enforced at checkout, where
    the customer's order history is available.
    """
    return validate_discount_code(request.discount_code, request.cart, request.customer_id)
