"""
core/config.py
--------------
Service-wide settings read from environment variables.

- Which document store backs the portfolio (``sqlite`` | ``supabase`` | ``none``).
- Typing speed of the terminal renderer.
- Session limits for the HTTP terminal.
"""

from __future__ import annotations
import os

# ---------------------------------------------------------------------------
# Document store
# ---------------------------------------------------------------------------

PORTFOLIO_STORE: str = os.getenv("PORTFOLIO_STORE", "sqlite").strip().lower()
PORTFOLIO_DB_URL: str | None = os.getenv("PORTFOLIO_DB_URL")
STORE_DEBUG: bool = os.getenv("STORE_DEBUG", "0") == "1"

# ---------------------------------------------------------------------------
# Terminal
# ---------------------------------------------------------------------------

TYPING_SPEED_MS: int = int(os.getenv("TYPING_SPEED_MS", "15"))
SESSION_LIMIT: int = int(os.getenv("SESSION_LIMIT", "200"))

# ---------------------------------------------------------------------------
# Service identity
# ---------------------------------------------------------------------------

BACKEND_VERSION: str = os.getenv("BACKEND_VERSION", "1.0")

# ---------------------------------------------------------------------------
# Arcade
# ---------------------------------------------------------------------------

# Directory holding the ``rive/*.riv`` game assets served by the backend
ARCADE_ASSETS_DIR: str = os.getenv("ARCADE_ASSETS_DIR", "static")
