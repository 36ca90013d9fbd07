"""Discount code Pydantic schemas."""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from enhanced_commerce.models.discount_code import DiscountKind


class CustomerRestrictions(BaseModel):
    """Who may redeem a discount code."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    allowed_customer_ids: frozenset[str] = Field(
        default_factory=frozenset, description="Customers allowed to redeem; empty means everyone"
    )
    first_time_only: bool = Field(default=False, description="Restrict to customers without prior completed orders")


class DiscountCode(BaseModel):
    """Redeemable rule reducing an order's subtotal.

    Created and edited in the store; usage_count is read only here.
    """

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: str | None = Field(default=None, description="Document ID")
    code: str = Field(min_length=1, description="Unique code customers enter")
    description: str | None = Field(default=None, description="Internal description")
    kind: DiscountKind = Field(description="percentage or fixed")
    value: Decimal = Field(ge=0, description="Percentage points or fixed amount")
    minimum_order: Decimal | None = Field(default=None, ge=0, description="Minimum cart subtotal")
    maximum_discount: Decimal | None = Field(
        default=None, ge=0, description="Cap on the discount amount (percentage codes only)"
    )
    valid_from: datetime = Field(description="Start of the validity window")
    valid_until: datetime = Field(description="End of the validity window")
    usage_limit: int | None = Field(default=None, gt=0, description="Maximum number of redemptions")
    usage_count: int = Field(default=0, ge=0, description="Redemptions so far")
    active: bool = Field(default=True, description="Whether the code can be used")
    customer_restrictions: CustomerRestrictions | None = Field(default=None, description="Eligibility restrictions")

    @field_validator("valid_from", "valid_until")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        """Treat naive timestamps as UTC."""
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class DiscountRejection(str, Enum):
    """Reasons a discount code cannot be applied, in check order."""

    INACTIVE = "inactive"
    NOT_YET_VALID = "not_yet_valid"
    EXPIRED = "expired"
    USAGE_LIMIT_REACHED = "usage_limit_reached"
    MINIMUM_ORDER_NOT_MET = "minimum_order_not_met"
    CUSTOMER_NOT_ELIGIBLE = "customer_not_eligible"
    FIRST_TIME_ONLY = "first_time_only"


class DiscountValidation(BaseModel):
    """Outcome of validating a discount code.

    ``message`` is user facing; ``reason`` is stable for clients.
    """

    model_config = ConfigDict(frozen=True)

    valid: bool = Field(description="Whether the code may be applied")
    reason: DiscountRejection | None = Field(default=None, description="Why the code was rejected")
    message: str | None = Field(default=None, description="User-facing rejection message")

    @classmethod
    def accepted(cls) -> "DiscountValidation":
        return cls(valid=True)

    @classmethod
    def rejected(cls, reason: DiscountRejection, message: str) -> "DiscountValidation":
        return cls(valid=False, reason=reason, message=message)
