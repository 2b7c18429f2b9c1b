"""
Supabase client connection.
"""

from typing import Optional

from supabase import create_client, Client

from talent_screen.config import Config


_client: Optional[Client] = None


def get_supabase(config: Config) -> Client:
    """Get the shared Supabase client, created on first use with the service role key."""
    global _client
    if _client is None:
        _client = create_client(config.supabase.url, config.supabase.service_role_key)
    return _client
