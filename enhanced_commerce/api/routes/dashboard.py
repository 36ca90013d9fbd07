"""Dashboard API routes for aggregate commerce statistics."""

from fastapi import APIRouter, Query

from enhanced_commerce.api.deps import AppSettings, DashboardServiceDep
from enhanced_commerce.schemas.dashboard import CommerceStats, RecentOrderListResponse

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get(
    "/stats",
    response_model=CommerceStats,
    summary="Commerce statistics",
    description="Order, revenue, customer and cart counts.",
)
async def get_stats(service: DashboardServiceDep) -> CommerceStats:
    """Return aggregate commerce statistics."""
    return await service.get_stats()


@router.get(
    "/recent-orders",
    response_model=RecentOrderListResponse,
    summary="Recent orders",
    description="Most recent orders, newest first.",
)
async def get_recent_orders(
    service: DashboardServiceDep,
    settings: AppSettings,
    limit: int | None = Query(default=None, ge=1, le=100, description="Number of orders to return"),
) -> RecentOrderListResponse:
    """Return the most recent orders.

    Args:
        service: Dashboard service.
        settings: Application settings (default list size).
        limit: Optional number of orders; defaults to RECENT_ORDERS_LIMIT.

    Returns:
        RecentOrderListResponse: Orders, newest first.
    """
    orders = await service.get_recent_orders(limit or settings.recent_orders_limit)
    return RecentOrderListResponse(items=orders)
