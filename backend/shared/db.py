from supabase import Client, ClientOptions, create_client

from config import settings


def get_supabase_client() -> Client:
    """Get initialized Supabase client."""
    url: str | None = settings.SUPABASE_URL
    key: str | None = settings.SUPABASE_SERVICE_KEY

    if not url or not key:
        raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_KEY must be set")

    options = ClientOptions(postgrest_client_timeout=settings.SUPABASE_TIMEOUT_SECONDS)
    return create_client(url, key, options=options)
