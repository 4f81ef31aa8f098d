# tests/test_document_store.py
import pytest

from analytics.engagement import STATS_KEY, increment_stat
from database.documents import DocumentKey, Query, StoreError, TransactionAborted


def test_set_get_update(store):
    key = DocumentKey("things", "a")
    assert store.get(key) is None
    store.set(key, {"x": 1, "y": 2})
    store.update(key, {"y": 3})
    assert store.get(key) == {"x": 1, "y": 3}


def test_update_missing_document_fails(store):
    with pytest.raises(StoreError):
        store.update(DocumentKey("things", "missing"), {"x": 1})


def test_returned_data_is_a_copy(store):
    key = DocumentKey("things", "a")
    store.set(key, {"items": [1]})
    store.get(key)["items"].append(2)
    assert store.get(key) == {"items": [1]}


def test_concurrent_increments_both_count(store):
    """A second writer commits between the first one's read and commit."""
    interfered = []

    def txn(tx):
        current = tx.get(STATS_KEY) or {}
        if not interfered:
            interfered.append(True)
            increment_stat(store, "likes")
        tx.set(STATS_KEY, {**current, "likes": int(current.get("likes", 0)) + 1})

    store.run_transaction(txn)
    assert store.get(STATS_KEY)["likes"] == 2


def test_transaction_gives_up_after_max_attempts(store):
    key = DocumentKey("things", "hot")
    store.set(key, {"n": 0})
    attempts = []

    def txn(tx):
        current = tx.get(key)
        attempts.append(1)
        store.set(key, {"n": current["n"] + 100})
        tx.set(key, {"n": current["n"] + 1})

    with pytest.raises(TransactionAborted):
        store.run_transaction(txn, max_attempts=5)
    assert len(attempts) == 5


def test_reads_after_writes_rejected(store):
    key = DocumentKey("things", "a")

    def txn(tx):
        tx.set(key, {"n": 1})
        tx.get(key)

    with pytest.raises(StoreError):
        store.run_transaction(txn)


def test_document_subscription(store):
    seen = []
    sub = store.subscribe(STATS_KEY, seen.append)
    assert seen == [None]

    increment_stat(store, "views")
    assert seen[-1] == {"likes": 0, "views": 1}

    sub.unsubscribe()
    increment_stat(store, "views")
    assert len(seen) == 2


def test_query_subscription_and_ordering(store):
    snapshots = []
    store.subscribe(Query("notes", descending=True), lambda docs: snapshots.append([d.data["n"] for d in docs]))
    for n in range(3):
        store.add("notes", {"n": n})

    assert snapshots[0] == []
    assert snapshots[-1] == [2, 1, 0]
    assert [d.data["n"] for d in store.query(Query("notes"))] == [0, 1, 2]
    assert len(store.query(Query("notes", limit=2))) == 2


def test_broken_listener_does_not_break_writers(store):
    def boom(_):
        raise RuntimeError("listener bug")

    store.subscribe(STATS_KEY, boom)
    assert increment_stat(store, "likes").likes == 1


def test_ping(store):
    store.ping()
