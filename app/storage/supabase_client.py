"""Service-role Supabase client singleton.

Only the Storage API is used: generated artifacts are uploaded through
SupabaseMediaStore. There are no database tables.
"""

from supabase import create_client, Client
from app.config import settings
from app.errors import ConfigurationError

_client: Client | None = None


def get_supabase() -> Client:
    """Get or create the Supabase client for Storage uploads.

    Raises ConfigurationError when the project URL or service-role key is
    missing; callers treat that as storage being unavailable.
    """
    global _client
    if _client is None:
        if not settings.storage_configured:
            raise ConfigurationError(
                "SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set"
            )
        _client = create_client(
            settings.supabase_url,
            settings.supabase_service_role_key,
        )
    return _client
