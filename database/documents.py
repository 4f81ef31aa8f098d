"""
database/documents.py
---------------------

Document-store contract shared by every persistence backend.

A document store keeps JSON documents addressed by ``collection/doc_id``
and offers:

- ``get`` / ``set`` / ``update`` / ``add`` for single documents
- ``query`` for a whole collection ordered by creation time
- ``run_transaction`` for atomic read-modify-write (optimistic, retried)
- ``subscribe`` for push-based snapshots, one full snapshot per change

Backends only implement the small ``_fetch`` / ``_fetch_many`` /
``_persist`` / ``_insert`` primitives; versioning, retry and fan-out to
subscribers live here so SQL and Supabase behave the same.
"""

from __future__ import annotations

import copy
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Union


# --------------------------------------------------------------------------- #
# Addressing
# --------------------------------------------------------------------------- #

@dataclass(frozen=True)
class DocumentKey:
    collection: str
    doc_id: str

    def __str__(self) -> str:
        return f"{self.collection}/{self.doc_id}"


@dataclass(frozen=True)
class Query:
    """All documents of a collection, ordered by creation time."""
    collection: str
    descending: bool = False
    limit: Optional[int] = None


@dataclass(frozen=True)
class Document:
    key: DocumentKey
    data: Dict[str, Any]
    version: int
    created_at: datetime

    @property
    def id(self) -> str:
        return self.key.doc_id


# --------------------------------------------------------------------------- #
# Errors
# --------------------------------------------------------------------------- #

class StoreError(RuntimeError):
    """Base class for document-store failures."""


class StoreUnavailable(StoreError):
    """The backend could not be reached or is not configured."""


class TransactionConflict(StoreError):
    """A document changed between read and commit. Retried internally."""


class TransactionAborted(StoreError):
    """A transaction kept conflicting and gave up."""


# --------------------------------------------------------------------------- #
# Transactions
# --------------------------------------------------------------------------- #

_UNREAD = object()


@dataclass
class Write:
    op: str                 # "set" | "update"
    data: Dict[str, Any]


class Transaction:
    """
    Read-modify-write unit handed to ``DocumentStore.run_transaction``.

    All reads must happen before the first write. The versions seen by
    reads are checked again at commit time.
    """

    def __init__(self, store: "DocumentStore"):
        self._store = store
        self.reads: Dict[DocumentKey, Optional[int]] = {}
        self.writes: Dict[DocumentKey, Write] = {}

    def get(self, key: DocumentKey) -> Optional[Dict[str, Any]]:
        if self.writes:
            raise StoreError("Transaction reads must be executed before all writes.")
        doc = self._store._fetch(key)
        self.reads[key] = doc.version if doc else None
        return copy.deepcopy(doc.data) if doc else None

    def set(self, key: DocumentKey, data: Dict[str, Any]) -> None:
        self.writes[key] = Write("set", copy.deepcopy(dict(data)))

    def update(self, key: DocumentKey, fields: Dict[str, Any]) -> None:
        self.writes[key] = Write("update", copy.deepcopy(dict(fields)))


# --------------------------------------------------------------------------- #
# Subscriptions
# --------------------------------------------------------------------------- #

Target = Union[DocumentKey, Query]
Snapshot = Union[Optional[Dict[str, Any]], List[Document]]


@dataclass
class Subscription:
    target: Target
    callback: Callable[[Any], None]
    _store: "DocumentStore" = field(repr=False)
    active: bool = True

    def unsubscribe(self) -> None:
        if self.active:
            self.active = False
            self._store._remove_listener(self)


# --------------------------------------------------------------------------- #
# Base store
# --------------------------------------------------------------------------- #

class DocumentStore(ABC):
    """Backend-agnostic document store."""

    name = "abstract"

    def __init__(self, debug: bool = False):
        self.debug = debug
        self._listeners: List[Subscription] = []
        self._lock = threading.RLock()

    # ---- backend primitives ------------------------------------------------

    @abstractmethod
    def _fetch(self, key: DocumentKey) -> Optional[Document]:
        ...

    @abstractmethod
    def _fetch_many(self, query: Query) -> List[Document]:
        ...

    @abstractmethod
    def _persist(self, key: DocumentKey, current: Optional[Document], data: Dict[str, Any]) -> None:
        """
        Write ``data`` for ``key`` atomically.

        ``current`` is the document as the commit saw it (None = absent).
        Must raise ``TransactionConflict`` if the stored version no longer
        matches ``current`` or if an insert collides with an existing row.
        """

    @abstractmethod
    def _insert(self, collection: str, data: Dict[str, Any]) -> Document:
        """Insert a document under a generated id."""

    @abstractmethod
    def ping(self) -> None:
        """Raise ``StoreUnavailable`` if the backend cannot be reached."""

    def sign_in(self) -> Any:
        """Open a session authorizing store access. Local backends need none."""
        return None

    # ---- public API --------------------------------------------------------

    def get(self, key: DocumentKey) -> Optional[Dict[str, Any]]:
        doc = self._fetch(key)
        return copy.deepcopy(doc.data) if doc else None

    def set(self, key: DocumentKey, data: Dict[str, Any]) -> None:
        """Create or fully overwrite a document."""
        self.run_transaction(lambda tx: tx.set(key, data))

    def update(self, key: DocumentKey, fields: Dict[str, Any]) -> None:
        """Merge top-level fields into an existing document."""
        self.run_transaction(lambda tx: tx.update(key, fields))

    def add(self, collection: str, data: Dict[str, Any]) -> Document:
        """Append a document with a generated id and a creation timestamp."""
        doc = self._insert(collection, copy.deepcopy(dict(data)))
        self._notify([doc.key])
        return doc

    def query(self, query: Query) -> List[Document]:
        return self._fetch_many(query)

    def run_transaction(self, fn: Callable[[Transaction], Any], max_attempts: int = 5) -> Any:
        """
        Run ``fn`` inside an optimistic transaction.

        ``fn`` may be called several times; it must only touch the store
        through the ``Transaction`` it receives.
        """
        for attempt in range(1, max_attempts + 1):
            tx = Transaction(self)
            result = fn(tx)
            try:
                self._commit(tx.reads, tx.writes)
                return result
            except TransactionConflict:
                if self.debug:
                    print(f"[{self.name}] ⚠️ Transaction conflict (attempt {attempt}/{max_attempts}), retrying …")
        raise TransactionAborted(f"Transaction failed after {max_attempts} attempts.")

    def subscribe(self, target: Target, callback: Callable[[Any], None]) -> Subscription:
        """
        Register ``callback`` for ``target`` and deliver the current snapshot
        immediately. Every later write delivers a full new snapshot.
        """
        sub = Subscription(target=target, callback=callback, _store=self)
        with self._lock:
            self._listeners.append(sub)
        self._deliver(sub)
        return sub

    # ---- internals ---------------------------------------------------------

    def _commit(self, reads: Dict[DocumentKey, Optional[int]], writes: Dict[DocumentKey, Write]) -> None:
        for key, write in writes.items():
            expected = reads.get(key, _UNREAD)
            current = self._fetch(key)
            if expected is not _UNREAD:
                seen = current.version if current else None
                if seen != expected:
                    raise TransactionConflict(f"{key} changed during transaction.")
            if write.op == "set":
                data = write.data
            else:
                if current is None:
                    raise StoreError(f"No document to update: {key}")
                data = {**current.data, **write.data}
            self._persist(key, current, data)
        if writes:
            self._notify(list(writes))

    def _remove_listener(self, sub: Subscription) -> None:
        with self._lock:
            if sub in self._listeners:
                self._listeners.remove(sub)

    def _snapshot(self, target: Target) -> Snapshot:
        if isinstance(target, Query):
            return self._fetch_many(target)
        return self.get(target)

    def _deliver(self, sub: Subscription) -> None:
        try:
            snapshot = self._snapshot(sub.target)
        except StoreError as e:
            print(f"[{self.name}] ⚠️ Snapshot for {sub.target} failed: {e}")
            return
        if not sub.active:
            return
        try:
            sub.callback(snapshot)
        except Exception as e:  # noqa: BLE001 - a broken listener must not break writers
            print(f"[{self.name}] ⚠️ Listener for {sub.target} raised {type(e).__name__}: {e}")

    def _notify(self, keys: List[DocumentKey]) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for sub in listeners:
            target = sub.target
            if isinstance(target, Query):
                hit = any(k.collection == target.collection for k in keys)
            else:
                hit = target in keys
            if hit:
                self._deliver(sub)
