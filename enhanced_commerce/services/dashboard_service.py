"""Aggregate commerce statistics for the reporting dashboard."""

import logging
from decimal import Decimal

from enhanced_commerce.schemas.dashboard import CommerceStats, RecentOrder
from enhanced_commerce.services.commerce_store import CommerceStore, totals_from_row

logger = logging.getLogger(__name__)


class DashboardService:
    """Read-only queries behind the commerce dashboard."""

    def __init__(self, store: CommerceStore | None = None) -> None:
        """Initialize dashboard service.

        Args:
            store: Optional commerce store for testing.
        """
        self.store = store or CommerceStore()

    async def get_stats(self) -> CommerceStats:
        """Count orders, customers and carts and sum completed revenue.

        Returns:
            CommerceStats: Current aggregate statistics.
        """
        revenue = sum(await self.store.completed_order_totals(), Decimal("0"))

        stats = CommerceStats(
            total_orders=await self.store.count("orders"),
            total_revenue=revenue,
            pending_orders=await self.store.count("orders", status="pending"),
            renewal_orders=await self.store.count("orders", order_type="renewal"),
            active_customers=await self.store.count("customers"),
            active_carts=await self.store.count("carts"),
        )
        logger.debug("Dashboard stats: %s", stats)
        return stats

    async def get_recent_orders(self, limit: int) -> list[RecentOrder]:
        """Get the newest orders with their customer email.

        Args:
            limit: Maximum number of orders.

        Returns:
            list[RecentOrder]: Orders, newest first.
        """
        rows = await self.store.list_recent_orders(limit)
        customer_ids = sorted({row["customer_id"] for row in rows if row.get("customer_id")})
        emails = await self.store.customer_emails(customer_ids)

        return [
            RecentOrder(
                id=row["id"],
                order_number=row.get("order_number"),
                order_kind=row.get("order_type") or "regular",
                customer_email=emails.get(row.get("customer_id") or ""),
                total=totals_from_row(row.get("pricing")).total,
                status=row.get("status") or "pending",
                created_at=row.get("created_at"),
            )
            for row in rows
        ]
