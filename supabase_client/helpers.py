# supabase_client/helpers.py
"""
Row-level helpers for the Supabase ``documents`` table.

Features
--------
- Thin wrappers for selecting, inserting and version-checked updates.
- Errors are converted into document-store errors so callers never see
  PostgREST types.
- Optional verbose debug output for diagnostics.

Used by ``supabase_client.store.SupabaseDocumentStore``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from postgrest.exceptions import APIError
from supabase import Client

from database.documents import StoreError, StoreUnavailable, TransactionConflict
from supabase_client.config import DOCUMENTS_TABLE, get_supabase_client

UNIQUE_VIOLATION = "23505"


def _wrap(e: Exception, action: str) -> StoreError:
    if isinstance(e, APIError) and e.code == UNIQUE_VIOLATION:
        return TransactionConflict(f"{action}: row already exists")
    if isinstance(e, APIError):
        return StoreError(f"{action} failed: {e.message}")
    return StoreUnavailable(f"{action} failed: {type(e).__name__}: {e}")


def fetch_row(client: Client, collection: str, doc_id: str, debug: bool = False) -> Optional[Dict[str, Any]]:
    """Return the raw row for ``collection/doc_id`` or None."""
    try:
        res = (
            client.table(DOCUMENTS_TABLE)
            .select("*")
            .eq("collection", collection)
            .eq("doc_id", doc_id)
            .limit(1)
            .execute()
        )
    except Exception as e:  # noqa: BLE001
        raise _wrap(e, f"Fetch {collection}/{doc_id}") from e

    rows = res.data or []
    if debug:
        print(f"[Supabase] ← {collection}/{doc_id}: {'found' if rows else 'absent'}")
    return rows[0] if rows else None


def fetch_rows(
    client: Client,
    collection: str,
    descending: bool = False,
    limit: Optional[int] = None,
    debug: bool = False,
) -> List[Dict[str, Any]]:
    """Return all rows of a collection ordered by creation time."""
    try:
        query = (
            client.table(DOCUMENTS_TABLE)
            .select("*")
            .eq("collection", collection)
            .order("created_at", desc=descending)
            .order("id", desc=descending)
        )
        if limit:
            query = query.limit(limit)
        res = query.execute()
    except Exception as e:  # noqa: BLE001
        raise _wrap(e, f"Query {collection}") from e

    rows = res.data or []
    if debug:
        print(f"[Supabase] ← Got {len(rows)} rows from '{collection}'")
    return rows


def insert_row(client: Client, row: Dict[str, Any], debug: bool = False) -> Dict[str, Any]:
    """Insert a new row; a duplicate key surfaces as ``TransactionConflict``."""
    if debug:
        print(f"[Supabase] → Inserting {row.get('collection')}/{row.get('doc_id')} …")
    try:
        res = client.table(DOCUMENTS_TABLE).insert(row).execute()
    except Exception as e:  # noqa: BLE001
        raise _wrap(e, f"Insert {row.get('collection')}/{row.get('doc_id')}") from e
    rows = res.data or []
    return rows[0] if rows else row


def update_row_if_version(
    client: Client,
    collection: str,
    doc_id: str,
    expected_version: int,
    values: Dict[str, Any],
    debug: bool = False,
) -> None:
    """
    Update a row only if its ``version`` still equals ``expected_version``.

    Raises ``TransactionConflict`` when no row matched.
    """
    if debug:
        print(f"[Supabase] → Updating {collection}/{doc_id} (version {expected_version}) …")
    try:
        res = (
            client.table(DOCUMENTS_TABLE)
            .update(values)
            .eq("collection", collection)
            .eq("doc_id", doc_id)
            .eq("version", expected_version)
            .execute()
        )
    except Exception as e:  # noqa: BLE001
        raise _wrap(e, f"Update {collection}/{doc_id}") from e

    if not res.data:
        raise TransactionConflict(f"{collection}/{doc_id} was modified concurrently.")


def test_connection(client: Optional[Client] = None, debug: bool = True) -> Optional[str]:
    """
    Verify Supabase client connectivity.

    Returns
    -------
    Optional[str]
        Supabase project URL if success, None if failure.
    """
    try:
        sb = client or get_supabase_client()
        sb.table(DOCUMENTS_TABLE).select("id").limit(1).execute()
        if debug:
            print(f"[Supabase] ✅ Connection OK → {sb.supabase_url}")
        return sb.supabase_url
    except Exception as e:  # noqa: BLE001
        if debug:
            print(f"[Supabase] ❌ Connection failed: {e}")
        return None
