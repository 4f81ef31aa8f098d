# database/models.py
from sqlalchemy import Column, Integer, String, JSON, DateTime, UniqueConstraint

# Important: must match Base from db_setup.py
from .db_setup import Base


class DocumentRecord(Base):
    """SQLAlchemy ORM model holding one JSON document of a collection."""
    __tablename__ = "documents"
    __table_args__ = (UniqueConstraint("collection", "doc_id", name="uq_documents_key"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    collection = Column(String(100), nullable=False, index=True)
    doc_id = Column(String(100), nullable=False)
    data = Column(JSON, nullable=False, default=dict)
    version = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    def __repr__(self):
        return f"<DocumentRecord(collection={self.collection}, doc_id={self.doc_id}, version={self.version})>"
