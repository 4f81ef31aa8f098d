# supabase_client/auth.py
"""
Anonymous sign-in against Supabase Auth.

The session only authorizes row access for the document table; failures
are reported to the caller and never retried here.
"""

from __future__ import annotations

from typing import Any

from supabase import Client

from database.documents import StoreUnavailable


def sign_in_anonymously(client: Client, debug: bool = True) -> Any:
    """
    Open an anonymous Supabase session.

    Returns
    -------
    The session object reported by Supabase Auth.

    Raises
    ------
    StoreUnavailable
        If Supabase rejects or cannot serve the sign-in.
    """
    try:
        res = client.auth.sign_in_anonymously()
    except Exception as e:  # noqa: BLE001 - gotrue raises several unrelated error types
        if debug:
            print(f"[Supabase] ❌ Anonymous sign-in failed: {type(e).__name__}: {e}")
        raise StoreUnavailable(f"Anonymous sign-in failed: {e}") from e

    session = getattr(res, "session", None)
    if session is None:
        raise StoreUnavailable("Anonymous sign-in returned no session.")
    if debug:
        print("[Supabase] ✅ Anonymous session established")
    return session
