"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from enhanced_commerce import __version__
from enhanced_commerce.api.middleware.error_handler import error_handler_middleware
from enhanced_commerce.api.middleware.latency_logging import latency_logging_middleware
from enhanced_commerce.api.routes import dashboard, discounts, health, pricing
from enhanced_commerce.api.routes.checkout import orders_router, router as checkout_router
from enhanced_commerce.core.config import get_settings

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Args:
        app: FastAPI application instance.

    Yields:
        None: Control back to the application.
    """
    settings = get_settings()
    logger.info("Starting %s in %s mode", settings.app_name, settings.app_env)
    if not settings.has_store:
        logger.warning("Document store not configured. Checkout, order and dashboard routes will fail.")

    yield

    logger.info("Shutting down %s", settings.app_name)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title="Enhanced Commerce API",
        description="Cart, order and discount code pricing with renewal support",
        version=__version__,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(BaseHTTPMiddleware, dispatch=latency_logging_middleware)

    # Added last so it is outermost and also formats middleware failures
    app.add_middleware(BaseHTTPMiddleware, dispatch=error_handler_middleware)

    # Mount health routes at root level (no prefix)
    app.include_router(health.router)

    api_v1_router = APIRouter(prefix="/api/v1")

    # Pure pricing and validation
    api_v1_router.include_router(pricing.router)
    api_v1_router.include_router(discounts.router)

    # Checkout, orders and renewals
    api_v1_router.include_router(checkout_router)
    api_v1_router.include_router(orders_router)

    # Reporting
    api_v1_router.include_router(dashboard.router)

    app.include_router(api_v1_router)

    return app


# Create application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "enhanced_commerce.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
