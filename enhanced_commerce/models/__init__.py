"""Document store row type definitions."""

from enhanced_commerce.models.cart import CartRow, CartStatus
from enhanced_commerce.models.customer import CustomerRow
from enhanced_commerce.models.discount_code import DiscountCodeRow, DiscountKind
from enhanced_commerce.models.order import (
    FulfillmentStatus,
    OrderKind,
    OrderRow,
    OrderStatus,
    PaymentStatus,
)

__all__ = [
    "CartRow",
    "CartStatus",
    "CustomerRow",
    "DiscountCodeRow",
    "DiscountKind",
    "FulfillmentStatus",
    "OrderKind",
    "OrderRow",
    "OrderStatus",
    "PaymentStatus",
]
