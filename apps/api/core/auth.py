"""Centralized authentication and storage-client dependencies.

The API is the only writer of the transaction store, so it talks to
Supabase with the service-role key. Callers (the chat bridge, the
scheduler) authenticate with a shared X-API-Key when one is configured.
"""

import hmac
from functools import lru_cache

from fastapi import Depends, Header
from supabase import Client, create_client

from apps.api.core.config import Settings, get_settings
from apps.api.core.errors import AuthenticationError


@lru_cache(maxsize=1)
def get_app_settings() -> Settings:
    """Settings resolved once per process; override in tests."""
    return get_settings()


async def require_api_key(
    x_api_key: str = Header(default=""),
    settings: Settings = Depends(get_app_settings),
) -> None:
    """Reject the request unless X-API-Key matches the configured API_KEY.

    An empty API_KEY disables the check.
    """
    expected = settings.API_KEY
    if not expected:
        return
    if not x_api_key or not hmac.compare_digest(x_api_key, expected):
        raise AuthenticationError("Missing or invalid X-API-Key header")


def get_service_client() -> Client:
    """Provide a service-role Supabase client (bypasses RLS).

    Used by the request handlers and the Celery bulletin task.
    """
    settings = get_app_settings()
    if not settings.SUPABASE_SERVICE_KEY:
        raise RuntimeError("SUPABASE_SERVICE_KEY is not configured")
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_KEY)
