# supabase_client/config.py
import os
from supabase import create_client, Client

from database.documents import StoreUnavailable

DOCUMENTS_TABLE = os.getenv("SUPABASE_DOCUMENTS_TABLE", "documents")


def supabase_configured() -> bool:
    return bool(os.getenv("SUPABASE_URL") and os.getenv("SUPABASE_ANON_KEY"))


def get_supabase_client() -> Client:
    """Return a Supabase client if credentials are set and well-formed."""
    url = os.getenv("SUPABASE_URL")
    key = os.getenv("SUPABASE_ANON_KEY")
    if not url or not key:
        raise StoreUnavailable("Supabase credentials not set in environment variables.")
    try:
        return create_client(url, key)
    except Exception as e:  # noqa: BLE001 - supabase raises its own exception type for bad URL/key
        print(f"[Supabase] ❌ Client creation failed: {e}")
        raise StoreUnavailable(f"Supabase client could not be created: {e}") from e
