# supabase_client/store.py
"""
Supabase-backed document store.

Expects a table shaped like the SQL backend's::

    create table documents (
        id bigint generated always as identity primary key,
        collection text not null,
        doc_id text not null,
        data jsonb not null default '{}',
        version integer not null default 1,
        created_at timestamptz not null default now(),
        updated_at timestamptz not null default now(),
        unique (collection, doc_id)
    );

Compare-and-set comes from updating with ``version = <seen>``. Each
document write is atomic on its own; a transaction that writes several
documents is applied one document at a time.
"""

from __future__ import annotations

import uuid
from datetime import datetime, UTC
from typing import Any, Dict, List, Optional

from supabase import Client

from database.documents import Document, DocumentKey, DocumentStore, Query, StoreUnavailable
from supabase_client.auth import sign_in_anonymously
from supabase_client.config import get_supabase_client
from supabase_client.helpers import (
    fetch_row,
    fetch_rows,
    insert_row,
    test_connection,
    update_row_if_version,
)


def _parse_ts(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)


def _to_document(row: Dict[str, Any]) -> Document:
    return Document(
        key=DocumentKey(row["collection"], row["doc_id"]),
        data=dict(row.get("data") or {}),
        version=int(row.get("version") or 1),
        created_at=_parse_ts(row.get("created_at") or datetime.now(UTC)),
    )


class SupabaseDocumentStore(DocumentStore):
    """Document store over a Supabase (PostgREST) table."""

    name = "Supabase"

    def __init__(self, client: Optional[Client] = None, debug: bool = False):
        super().__init__(debug=debug)
        # created up front so a bad URL or key surfaces as StoreUnavailable here
        self._client = client or get_supabase_client()

    @property
    def client(self) -> Client:
        return self._client

    def sign_in(self) -> Any:
        """Authenticate this store's client with an anonymous session."""
        return sign_in_anonymously(self.client, debug=self.debug)

    def _fetch(self, key: DocumentKey) -> Optional[Document]:
        row = fetch_row(self.client, key.collection, key.doc_id, debug=self.debug)
        return _to_document(row) if row else None

    def _fetch_many(self, query: Query) -> List[Document]:
        rows = fetch_rows(
            self.client, query.collection, descending=query.descending, limit=query.limit, debug=self.debug
        )
        return [_to_document(r) for r in rows]

    def _persist(self, key: DocumentKey, current: Optional[Document], data: Dict[str, Any]) -> None:
        now = datetime.now(UTC).isoformat()
        if current is None:
            insert_row(
                self.client,
                {
                    "collection": key.collection,
                    "doc_id": key.doc_id,
                    "data": data,
                    "version": 1,
                    "created_at": now,
                    "updated_at": now,
                },
                debug=self.debug,
            )
            return
        update_row_if_version(
            self.client,
            key.collection,
            key.doc_id,
            current.version,
            {"data": data, "version": current.version + 1, "updated_at": now},
            debug=self.debug,
        )

    def _insert(self, collection: str, data: Dict[str, Any]) -> Document:
        now = datetime.now(UTC).isoformat()
        row = insert_row(
            self.client,
            {
                "collection": collection,
                "doc_id": uuid.uuid4().hex[:20],
                "data": data,
                "version": 1,
                "created_at": now,
                "updated_at": now,
            },
            debug=self.debug,
        )
        return _to_document(row)

    def ping(self) -> None:
        if test_connection(self.client, debug=self.debug) is None:
            raise StoreUnavailable("Supabase documents table is unreachable.")
