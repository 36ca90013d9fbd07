"""Discount code model type definitions."""

from datetime import datetime
from typing import Literal, TypedDict


DiscountKind = Literal["percentage", "fixed"]


class CustomerRestrictionsRow(TypedDict, total=False):
    """Eligibility restrictions on a discount code."""

    specific_customer_ids: list[str]
    first_time_customers_only: bool


class DiscountCodeRow(TypedDict, total=False):
    """Discount codes table row representation.

    usage_count is incremented by the store on redemption only.
    """

    id: str
    code: str
    description: str | None
    type: DiscountKind
    value: str
    minimum_order: str | None
    maximum_discount: str | None
    valid_from: datetime | str
    valid_until: datetime | str
    usage_limit: int | None
    usage_count: int
    customer_restrictions: CustomerRestrictionsRow | None
    active: bool
