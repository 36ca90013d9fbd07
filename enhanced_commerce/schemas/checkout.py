"""Checkout and discount validation request schemas."""

from pydantic import BaseModel, Field

from enhanced_commerce.schemas.cart import Cart
from enhanced_commerce.schemas.discount import DiscountCode
from enhanced_commerce.schemas.order import CheckoutInfo


class DiscountValidationRequest(BaseModel):
    """Request schema for POST /discounts/validate."""

    discount_code: DiscountCode = Field(description="Discount code to check")
    cart: Cart = Field(description="Cart the code would apply to")
    customer_id: str | None = Field(default=None, description="Customer redeeming the code")


class CheckoutRequest(BaseModel):
    """Request schema for POST /checkout."""

    cart_id: str = Field(min_length=1, description="Document ID of the cart to convert")
    discount_code: str | None = Field(
        default=None, description="Code to apply; the cart's applied code is used when omitted"
    )
    checkout: CheckoutInfo = Field(default_factory=CheckoutInfo, description="Payment and customer details")
