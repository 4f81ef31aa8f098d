"""
core/comments.py
----------------
Visitor comment wall.

Comments are append-only documents in ``contactComments``; the store
stamps the creation time and the wall is always shown newest first.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable, List, Optional

from pydantic import BaseModel, Field

from database.documents import Document, DocumentStore, Query, Subscription

COMMENTS_COLLECTION = "contactComments"
ANONYMOUS = "Anonymous"
MAX_MESSAGE_LENGTH = 2000


class CommentRejected(ValueError):
    pass


class CommentEntry(BaseModel):
    id: Optional[str] = None
    name: str = Field(default=ANONYMOUS)
    message: str
    created_at: Optional[datetime] = None

    @classmethod
    def from_document(cls, doc: Document) -> "CommentEntry":
        return cls(
            id=doc.id,
            name=doc.data.get("name") or ANONYMOUS,
            message=doc.data.get("message", ""),
            created_at=doc.created_at,
        )


def add_comment(store: DocumentStore, name: Optional[str], message: Optional[str]) -> CommentEntry:
    """
    Append a comment.

    Raises
    ------
    CommentRejected
        If the message is blank or too long.
    """
    author = (name or "").strip() or ANONYMOUS
    text = (message or "").strip()
    if not text:
        raise CommentRejected("A comment needs a message.")
    if len(text) > MAX_MESSAGE_LENGTH:
        raise CommentRejected(f"Comments are limited to {MAX_MESSAGE_LENGTH} characters.")

    doc = store.add(COMMENTS_COLLECTION, {"name": author, "message": text})
    return CommentEntry.from_document(doc)


def list_comments(store: DocumentStore, limit: Optional[int] = None) -> List[CommentEntry]:
    docs = store.query(Query(COMMENTS_COLLECTION, descending=True, limit=limit))
    return [CommentEntry.from_document(d) for d in docs]


def subscribe_comments(store: DocumentStore, callback: Callable[[List[CommentEntry]], None]) -> Subscription:
    """Push the full comment list (newest first) now and after every new comment."""
    query = Query(COMMENTS_COLLECTION, descending=True)
    return store.subscribe(query, lambda docs: callback([CommentEntry.from_document(d) for d in docs]))
