"""FastAPI dependencies for settings and services."""

from typing import Annotated

from fastapi import Depends

from enhanced_commerce.core.config import Settings, get_settings
from enhanced_commerce.services.checkout_service import CheckoutService
from enhanced_commerce.services.dashboard_service import DashboardService


def get_checkout_service() -> CheckoutService:
    """Create a checkout service bound to the document store."""
    return CheckoutService()


def get_dashboard_service() -> DashboardService:
    """Create a dashboard service bound to the document store."""
    return DashboardService()


AppSettings = Annotated[Settings, Depends(get_settings)]
CheckoutServiceDep = Annotated[CheckoutService, Depends(get_checkout_service)]
DashboardServiceDep = Annotated[DashboardService, Depends(get_dashboard_service)]
