"""
core/content_store.py
---------------------
Owns the canonical portfolio record for one interpreter.

- ``load_content()`` adopts the stored record, seeds the store with the
  embedded defaults when no record exists, and falls back to defaults
  (without persisting) on any other failure.
- ``save_content(record)`` overwrites the stored record as a whole and
  replaces the in-memory record only once the write succeeded.
"""

from __future__ import annotations

from typing import Callable, Optional

from pydantic import ValidationError

from core.portfolio import PortfolioContent, default_content
from database.documents import DocumentKey, DocumentStore, StoreError

CONTENT_KEY = DocumentKey("portfolio", "mainContent")


class ContentLoadError(RuntimeError):
    """Loading failed; defaults were adopted."""


class ContentSaveError(RuntimeError):
    """Persisting failed; the in-memory record is unchanged."""


class ContentStore:
    def __init__(
        self,
        store: Optional[DocumentStore],
        defaults: Callable[[], PortfolioContent] = default_content,
        debug: bool = True,
    ):
        self.store = store
        self._defaults = defaults
        self._content = defaults()
        self.debug = debug

    @property
    def content(self) -> PortfolioContent:
        return self._content

    @property
    def persistent(self) -> bool:
        return self.store is not None

    def snapshot(self) -> PortfolioContent:
        """Deep copy of the current record, safe to mutate."""
        return self._content.model_copy(deep=True)

    def load_content(self) -> PortfolioContent:
        """
        Load the canonical record.

        Raises
        ------
        ContentLoadError
            When the record could not be loaded; defaults are in place.
        """
        if self.store is None:
            self._content = self._defaults()
            raise ContentLoadError("Document store not configured.")

        try:
            data = self.store.get(CONTENT_KEY)
            if data is None:
                defaults = self._defaults()
                self.store.set(CONTENT_KEY, defaults.model_dump())
                self._content = defaults
                if self.debug:
                    print(f"[ContentStore] ℹ️ No record at {CONTENT_KEY}; seeded defaults.")
            else:
                self._content = PortfolioContent.model_validate(data)
                if self.debug:
                    print(f"[ContentStore] ✅ Loaded record from {CONTENT_KEY}.")
        except (StoreError, ValidationError) as e:
            print(f"[ContentStore] ⚠️ Load failed, using defaults: {type(e).__name__}: {e}")
            self._content = self._defaults()
            raise ContentLoadError(str(e)) from e

        return self._content

    def save_content(self, record: PortfolioContent) -> None:
        """
        Persist ``record`` as the full canonical record.

        Raises
        ------
        ContentSaveError
            When the write failed; the in-memory record is left as it was.
        """
        if self.store is None:
            raise ContentSaveError("Document store not configured.")
        try:
            self.store.set(CONTENT_KEY, record.model_dump())
        except StoreError as e:
            print(f"[ContentStore] ⚠️ Save failed: {type(e).__name__}: {e}")
            raise ContentSaveError(str(e)) from e
        self._content = record.model_copy(deep=True)
