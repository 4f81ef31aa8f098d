"""
Administrator credential kept in the document store.

The secret is stored and compared verbatim. There is no hashing, lockout
or rate limit; anyone who can read the ``portfolio/admin`` document can
edit the portfolio.
"""

from __future__ import annotations

import hmac
from typing import Optional

from database.documents import DocumentKey, DocumentStore, StoreUnavailable

ADMIN_KEY = DocumentKey("portfolio", "admin")


class CredentialStore:
    def __init__(self, store: Optional[DocumentStore]):
        self.store = store

    def _require_store(self) -> DocumentStore:
        if self.store is None:
            raise StoreUnavailable("Document store not configured.")
        return self.store

    def get(self) -> Optional[str]:
        """Return the stored secret, or None if none was created yet."""
        data = self._require_store().get(ADMIN_KEY)
        if not data:
            return None
        return data.get("password")

    def create(self, secret: str) -> None:
        self._require_store().set(ADMIN_KEY, {"password": secret})

    @staticmethod
    def matches(entered: str, stored: str) -> bool:
        return hmac.compare_digest(entered.encode("utf-8"), stored.encode("utf-8"))
