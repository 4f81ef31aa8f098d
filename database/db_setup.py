# database/db_setup.py
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool
import os

# ---------------------------------------------------------------------
# Database path setup
# ---------------------------------------------------------------------
# Default document database lives inside the database/ directory
DB_FILENAME = "portfolio.db"
DB_PATH = os.path.join(os.path.dirname(__file__), DB_FILENAME)
DB_URL = os.getenv("PORTFOLIO_DB_URL", f"sqlite:///{DB_PATH}")

# ---------------------------------------------------------------------
# Base class for ORM models
# ---------------------------------------------------------------------
Base = declarative_base()

# ---------------------------------------------------------------------
# Engine factory
# ---------------------------------------------------------------------
def get_engine(url: str | None = None):
    """
    Return a SQLAlchemy Engine for the document database.

    In-memory SQLite URLs share one connection so every session sees
    the same data.

    Example:
        engine = get_engine("sqlite://")
    """
    url = url or DB_URL
    if url.startswith("sqlite") and (url == "sqlite://" or ":memory:" in url):
        return create_engine(
            url,
            echo=False,
            future=True,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    if url.startswith("sqlite"):
        return create_engine(url, echo=False, future=True, connect_args={"check_same_thread": False})
    return create_engine(url, echo=False, future=True)
