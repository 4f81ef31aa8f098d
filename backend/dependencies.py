"""
backend/dependencies.py
-----------------------
Process-wide objects injected into the routers.

Tests replace them through ``app.dependency_overrides``.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from fastapi import Depends, HTTPException

from backend.sessions import SessionRegistry
from core.safe_connect import open_document_store
from database.documents import DocumentStore


@lru_cache(maxsize=1)
def get_store() -> Optional[DocumentStore]:
    store = open_document_store()
    if store is not None:
        print(f"[Backend] ✅ Document store ready: {store.name}")
    return store


@lru_cache(maxsize=1)
def _registry() -> SessionRegistry:
    return SessionRegistry(get_store())


def get_sessions() -> SessionRegistry:
    return _registry()


def require_store(store: Optional[DocumentStore] = Depends(get_store)) -> DocumentStore:
    """Routes that only make sense with persistence answer 503 without it."""
    if store is None:
        raise HTTPException(status_code=503, detail="Document store not configured.")
    return store
