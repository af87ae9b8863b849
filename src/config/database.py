"""
Database client singletons.

Listings live in Supabase. The search core only reads from it, so a single
shared service-role client is enough for the whole process.
"""

from functools import lru_cache
from typing import Optional

from supabase import Client, create_client

from config.settings import get_settings


class SupabaseClientError(Exception):
    """Raised when Supabase client cannot be created."""
    pass


@lru_cache(maxsize=1)
def get_supabase_client() -> Client:
    """
    Get the singleton Supabase client instance.

    Returns:
        Client: The Supabase client instance

    Raises:
        SupabaseClientError: If storage is not configured or the client
            cannot be created
    """
    settings = get_settings()
    if not settings.supabase_configured:
        raise SupabaseClientError("Supabase is not configured (SUPABASE_URL / SUPABASE_SERVICE_KEY)")
    try:
        return create_client(settings.supabase_url, settings.supabase_service_key)
    except Exception as e:
        raise SupabaseClientError(f"Failed to create Supabase client: {e}") from e


def get_supabase_client_optional() -> Optional[Client]:
    """
    Get the Supabase client, returning None if it cannot be created.

    Useful for graceful degradation when Supabase is not configured.
    """
    try:
        return get_supabase_client()
    except SupabaseClientError:
        return None
