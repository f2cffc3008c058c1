"""Supabase client singleton.

``get_supabase()`` returns the process-wide client used for every read and
conditional update against the ``applications`` table.
"""

from supabase import Client, create_client

from app.core.config import settings

_client: Client | None = None


def get_supabase() -> Client:
    """Return the singleton Supabase client, creating it on first call."""
    global _client
    if _client is None:
        _client = create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)
    return _client


def reset_supabase() -> None:
    """Drop the cached client so the next call builds a fresh one."""
    global _client
    _client = None
