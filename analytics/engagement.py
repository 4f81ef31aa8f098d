"""
analytics/engagement.py
-----------------------

Like / view counters for the contact section.

Counters live in one document (``meta/contactStats``) and only ever go up,
through a read-modify-write transaction so concurrent visitors never
overwrite each other's increments. A visitor's own browsing session is
limited to one view and one like by ``VisitorFlags``; that guard is
client-side and best-effort.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, TypeVar

from pydantic import BaseModel

from database.documents import DocumentKey, DocumentStore, StoreError, Subscription, Transaction

STATS_KEY = DocumentKey("meta", "contactStats")
COUNTERS = ("likes", "views")

# session-state keys the UI keeps its flags under
VIEWED_FLAG = "contact_viewed_v1"
LIKED_FLAG = "contact_liked_v1"

T = TypeVar("T")


class EngagementStats(BaseModel):
    likes: int = 0
    views: int = 0

    @classmethod
    def from_snapshot(cls, data: Optional[Dict[str, Any]]) -> "EngagementStats":
        data = data or {}
        return cls(likes=int(data.get("likes") or 0), views=int(data.get("views") or 0))


def increment_stat(store: DocumentStore, counter: str) -> EngagementStats:
    """Atomically add one to ``counter`` and return the resulting stats."""
    if counter not in COUNTERS:
        raise ValueError(f"Unknown counter '{counter}' (expected one of {COUNTERS}).")

    def txn(tx: Transaction) -> EngagementStats:
        current = tx.get(STATS_KEY)
        if current is None:
            seeded = {name: 0 for name in COUNTERS}
            seeded[counter] = 1
            tx.set(STATS_KEY, seeded)
            return EngagementStats(**seeded)
        value = int(current.get(counter) or 0) + 1
        tx.update(STATS_KEY, {counter: value})
        return EngagementStats.from_snapshot({**current, counter: value})

    return store.run_transaction(txn)


def read_stats(store: DocumentStore) -> EngagementStats:
    return EngagementStats.from_snapshot(store.get(STATS_KEY))


def subscribe_stats(store: DocumentStore, callback: Callable[[EngagementStats], None]) -> Subscription:
    """Push the full current stats to ``callback`` now and after every change."""
    return store.subscribe(STATS_KEY, lambda snap: callback(EngagementStats.from_snapshot(snap)))


@dataclass
class VisitorFlags:
    """Per-visitor guards: at most one view and one like per browsing session."""

    viewed: bool = False
    liked: bool = False

    def claim_view(self) -> bool:
        if self.viewed:
            return False
        self.viewed = True
        return True


def record_view(flags: VisitorFlags, increment: Callable[[], T]) -> Optional[T]:
    """
    Count this visitor's view once.

    ``increment`` performs the actual bump (a store transaction, or a POST
    from the UI). The flag is claimed before it runs; a failed increment is
    logged and not retried.
    """
    if not flags.claim_view():
        return None
    try:
        return increment()
    except StoreError as e:
        print(f"[Engagement] ⚠️ View increment failed: {e}")
        return None


def record_like(flags: VisitorFlags, increment: Callable[[], T]) -> Optional[T]:
    """
    Count this visitor's like once.

    The flag is only set once ``increment`` returned a non-empty result, so
    a failed like can be retried. Store errors propagate.
    """
    if flags.liked:
        return None
    result = increment()
    if result:
        flags.liked = True
    return result
