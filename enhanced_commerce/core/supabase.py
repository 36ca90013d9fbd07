"""Supabase client singleton for document store operations."""

from functools import lru_cache
from typing import Any

from supabase import Client, create_client

from enhanced_commerce.core.config import get_settings


@lru_cache
def get_supabase_client() -> Client:
    """Get cached Supabase client singleton for store operations.

    Uses the secret key for backend operations. Authorization of the
    caller is the hosting platform's concern and must already have
    happened before any record reaches this service.

    Returns:
        Client: Supabase client instance.

    Raises:
        ValueError: If the store is not configured.
    """
    settings = get_settings()
    if not settings.has_store:
        raise ValueError(
            "Document store is not configured. Please set SUPABASE_URL and SUPABASE_SECRET_KEY."
        )
    return create_client(
        settings.supabase_url,
        settings.supabase_secret_key,
    )


async def check_database_connection() -> dict[str, Any]:
    """Check if the document store connection is healthy.

    Performs a simple query to verify connectivity.

    Returns:
        dict: Connection status with 'healthy' boolean and optional 'error' message.
    """
    try:
        client = get_supabase_client()
        client.table("orders").select("id").limit(1).execute()
        return {"healthy": True}
    except Exception as e:
        return {"healthy": False, "error": str(e)}
