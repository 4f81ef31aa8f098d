# database/queries.py
from __future__ import annotations

import uuid
from datetime import datetime, UTC
from typing import Any, Dict, List, Optional

from sqlalchemy import select, update, text
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from .db_setup import Base, get_engine
from .documents import (
    Document,
    DocumentKey,
    DocumentStore,
    Query,
    StoreError,
    StoreUnavailable,
    TransactionConflict,
)
from .models import DocumentRecord


def _aware(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns
    return value if value.tzinfo else value.replace(tzinfo=UTC)


def _to_document(row: DocumentRecord) -> Document:
    return Document(
        key=DocumentKey(row.collection, row.doc_id),
        data=dict(row.data or {}),
        version=row.version,
        created_at=_aware(row.created_at),
    )


# ---------------------------------------------------------------------
# SQLAlchemy-backed document store
# ---------------------------------------------------------------------
class SqlDocumentStore(DocumentStore):
    """
    Document store on a single SQL table (``documents``).

    Every row carries a ``version`` column; writes are conditional on the
    version seen at read time, which gives transactions their
    compare-and-set semantics.

    Example:
        store = SqlDocumentStore("sqlite://")
        store.set(DocumentKey("meta", "contactStats"), {"likes": 0, "views": 0})
    """

    name = "SQL"

    def __init__(self, url: Optional[str] = None, *, engine=None, debug: bool = False):
        super().__init__(debug=debug)
        self.engine = engine or get_engine(url)
        Base.metadata.create_all(self.engine)
        self.SessionLocal = sessionmaker(
            bind=self.engine, autoflush=False, autocommit=False, expire_on_commit=False
        )

    # -----------------------------------------------------------------
    # Reads
    # -----------------------------------------------------------------
    def _fetch(self, key: DocumentKey) -> Optional[Document]:
        try:
            with self.SessionLocal() as session:
                row = session.scalars(
                    select(DocumentRecord).where(
                        DocumentRecord.collection == key.collection,
                        DocumentRecord.doc_id == key.doc_id,
                    )
                ).first()
                return _to_document(row) if row else None
        except OperationalError as e:
            raise StoreUnavailable(f"Document database unreachable: {e}") from e
        except SQLAlchemyError as e:
            raise StoreError(f"Read of {key} failed: {e}") from e

    def _fetch_many(self, query: Query) -> List[Document]:
        order = (
            (DocumentRecord.created_at.desc(), DocumentRecord.id.desc())
            if query.descending
            else (DocumentRecord.created_at.asc(), DocumentRecord.id.asc())
        )
        stmt = select(DocumentRecord).where(DocumentRecord.collection == query.collection).order_by(*order)
        if query.limit:
            stmt = stmt.limit(query.limit)
        try:
            with self.SessionLocal() as session:
                return [_to_document(row) for row in session.scalars(stmt).all()]
        except OperationalError as e:
            raise StoreUnavailable(f"Document database unreachable: {e}") from e
        except SQLAlchemyError as e:
            raise StoreError(f"Query on '{query.collection}' failed: {e}") from e

    # -----------------------------------------------------------------
    # Writes
    # -----------------------------------------------------------------
    def _persist(self, key: DocumentKey, current: Optional[Document], data: Dict[str, Any]) -> None:
        now = datetime.now(UTC)
        try:
            with self.SessionLocal.begin() as session:
                if current is None:
                    session.add(
                        DocumentRecord(
                            collection=key.collection,
                            doc_id=key.doc_id,
                            data=data,
                            version=1,
                            created_at=now,
                            updated_at=now,
                        )
                    )
                    session.flush()
                else:
                    res = session.execute(
                        update(DocumentRecord)
                        .where(
                            DocumentRecord.collection == key.collection,
                            DocumentRecord.doc_id == key.doc_id,
                            DocumentRecord.version == current.version,
                        )
                        .values(data=data, version=current.version + 1, updated_at=now)
                    )
                    if res.rowcount == 0:
                        raise TransactionConflict(f"{key} was modified concurrently.")
        except IntegrityError as e:
            raise TransactionConflict(f"{key} was created concurrently.") from e
        except OperationalError as e:
            raise StoreUnavailable(f"Document database unreachable: {e}") from e
        except SQLAlchemyError as e:
            raise StoreError(f"Write of {key} failed: {e}") from e

    def _insert(self, collection: str, data: Dict[str, Any]) -> Document:
        now = datetime.now(UTC)
        row = DocumentRecord(
            collection=collection,
            doc_id=uuid.uuid4().hex[:20],
            data=data,
            version=1,
            created_at=now,
            updated_at=now,
        )
        try:
            with self.SessionLocal.begin() as session:
                session.add(row)
                session.flush()
                return _to_document(row)
        except OperationalError as e:
            raise StoreUnavailable(f"Document database unreachable: {e}") from e
        except SQLAlchemyError as e:
            raise StoreError(f"Insert into '{collection}' failed: {e}") from e

    # -----------------------------------------------------------------
    # Diagnostics
    # -----------------------------------------------------------------
    def ping(self) -> None:
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            raise StoreUnavailable(f"Document database unreachable: {e}") from e
