"""
Portfolio Safe Store Gateway
----------------------------

Single front door for opening the document store behind the portfolio.

Purpose
-------
All outbound persistence (local SQL database or Supabase) is opened here
so a missing credential or an unreachable backend degrades the service to
embedded defaults instead of crashing it.

Key Features
------------
- Backend chosen by ``PORTFOLIO_STORE`` (``sqlite`` | ``supabase`` | ``none``)
- Graceful fallback: returns None when the store cannot be opened
- JSON-safe connection report for the health endpoint
- Logs connection events, never printing secrets

Usage
-----
$ python -m core.safe_connect
"""

from __future__ import annotations

import json
from datetime import datetime, UTC
from typing import Any, Dict, Optional

from core import config
from database.documents import DocumentStore, StoreError
from database.queries import SqlDocumentStore
from supabase_client.config import supabase_configured
from supabase_client.store import SupabaseDocumentStore


def open_document_store(kind: Optional[str] = None, debug: Optional[bool] = None) -> Optional[DocumentStore]:
    """
    Open the configured document store.

    Never raises for an unavailable backend: logs and returns None, which
    puts the portfolio in non-persistent mode.
    """
    kind = (kind or config.PORTFOLIO_STORE).lower()
    debug = config.STORE_DEBUG if debug is None else debug

    if kind == "none":
        print("[Store] ℹ️ PORTFOLIO_STORE=none; running without persistence.")
        return None

    if kind == "supabase":
        if not supabase_configured():
            print("[Supabase] ❌ Missing SUPABASE_URL or SUPABASE_ANON_KEY; running without persistence.")
            return None
        try:
            return SupabaseDocumentStore(debug=debug)
        except StoreError as e:
            print(f"[Supabase] ⚠️ Client creation failed; running without persistence. Reason: {e}")
            return None

    if kind == "sqlite":
        try:
            return SqlDocumentStore(config.PORTFOLIO_DB_URL, debug=debug)
        except Exception as e:  # noqa: BLE001 - any engine/DDL failure means no persistence
            print(f"[Store] ⚠️ SQL store unavailable; running without persistence. Reason: {e}")
            return None

    raise ValueError(f"Unknown PORTFOLIO_STORE '{kind}' (expected sqlite, supabase or none).")


def test_connection(store: Optional[DocumentStore]) -> Dict[str, Any]:
    """
    Check a document store and report its status.

    Returns
    -------
    dict
        {
            "timestamp": "<UTC ISO time>",
            "backend": "SQL" | "Supabase" | None,
            "configured": bool,
            "connected": bool,
            "error": Optional[str],
        }
    """
    status: Dict[str, Any] = {
        "timestamp": datetime.now(UTC).isoformat(),
        "backend": store.name if store else None,
        "configured": store is not None,
        "connected": False,
        "error": None,
    }
    if store is None:
        status["error"] = "document store not configured"
        return status

    try:
        store.ping()
        status["connected"] = True
    except StoreError as e:
        status["error"] = str(e)

    return status


if __name__ == "__main__":
    print(json.dumps(test_connection(open_document_store()), indent=2))
