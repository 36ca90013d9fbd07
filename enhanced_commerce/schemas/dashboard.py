"""Dashboard Pydantic schemas for aggregate commerce statistics."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from enhanced_commerce.models.order import OrderKind


class CommerceStats(BaseModel):
    """Aggregate counts shown on the commerce dashboard."""

    model_config = ConfigDict(from_attributes=True)

    total_orders: int = Field(default=0, ge=0, description="All orders")
    total_revenue: Decimal = Field(default=Decimal("0"), description="Sum of completed order totals")
    pending_orders: int = Field(default=0, ge=0, description="Orders awaiting processing")
    renewal_orders: int = Field(default=0, ge=0, description="Renewal orders")
    active_customers: int = Field(default=0, ge=0, description="Customer records")
    active_carts: int = Field(default=0, ge=0, description="Cart records")


class RecentOrder(BaseModel):
    """Summary row for the recent orders list."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(description="Order document ID")
    order_number: str | None = Field(default=None, description="Order number")
    order_kind: OrderKind = Field(default="regular", description="regular or renewal")
    customer_email: str | None = Field(default=None, description="Customer email")
    total: Decimal = Field(default=Decimal("0"), description="Order total")
    status: str = Field(description="Order status")
    created_at: datetime | None = Field(default=None, description="Creation timestamp")


class RecentOrderListResponse(BaseModel):
    """Schema for recent order list API responses."""

    items: list[RecentOrder] = Field(description="Most recent orders, newest first")
