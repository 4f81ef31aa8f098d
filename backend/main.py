"""
Portfolio Terminal Backend API
==============================

FastAPI service exposing the terminal interpreter, the portfolio content,
engagement counters, the comment wall, the arcade and health.

Design Intent
-------------
• Terminal
    - One interpreter per session, driven by `/terminal/sessions/*`.
    - Output is computed eagerly; each display entry carries its typing
      speed so the client replays the animation.
    - `sudo update ...` prompts travel as `pending_prompt` and are answered
      through `/prompt` (null = cancel).

• Persistence
    - Document store chosen by `PORTFOLIO_STORE` (sqlite | supabase | none).
    - A missing or unreachable store never crashes the service: the
      terminal falls back to embedded defaults, persistence-only routes
      answer 503.

• Visitor profile
    - `/content`, `/engagement/*`, `/comments`, `/arcade/*`.
"""

from __future__ import annotations

import os
import sys
from typing import Optional

from fastapi import Depends, FastAPI
from fastapi.staticfiles import StaticFiles

# --------------------------------------------------------------------------- #
# Path setup: ensure project root on sys.path
# --------------------------------------------------------------------------- #

# Allows imports like `core.*`, `analytics.*`, `supabase_client.*` when running via uvicorn
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.append(ROOT_DIR)

from backend.dependencies import get_sessions, get_store
from backend.routes.arcade import router as arcade_router
from backend.routes.comments import router as comments_router
from backend.routes.engagement import router as engagement_router
from backend.routes.terminal import router as terminal_router
from backend.sessions import SessionRegistry
from core import config
from core.content_store import ContentLoadError, ContentStore
from core.health import system_health
from core.metadata import get_metadata
from database.documents import DocumentStore

# --------------------------------------------------------------------------- #
# FastAPI App
# --------------------------------------------------------------------------- #

_meta = get_metadata()

app = FastAPI(
    title=f"{_meta['project']} Backend API",
    version=_meta["version"],
    description=(
        "Backend for the terminal portfolio.\n"
        "- Command interpreter sessions with privileged edits.\n"
        "- Portfolio content, like/view counters and comment wall.\n"
        "- Arcade catalogue with play counters."
    ),
)

for _router in (terminal_router, engagement_router, comments_router, arcade_router):
    app.include_router(_router)
    print(f"[Backend] ✅ Registered {_router.prefix} router.")

_rive_dir = os.path.join(config.ARCADE_ASSETS_DIR, "rive")
if os.path.isdir(_rive_dir):
    app.mount("/rive", StaticFiles(directory=_rive_dir), name="rive")
    print(f"[Backend] ✅ Serving arcade assets from {_rive_dir}.")
else:
    print(f"[Backend] ℹ️ No arcade assets at {_rive_dir}; games will not load.")

# --------------------------------------------------------------------------- #
# Core Routes
# --------------------------------------------------------------------------- #


@app.get("/")
async def root(
    store: Optional[DocumentStore] = Depends(get_store),
    sessions: SessionRegistry = Depends(get_sessions),
):
    """
    Basic liveness check.
    """
    return {
        "status": "ok",
        "message": f"{_meta['project']} backend is live.",
        "version": app.version,
        "store": store.name if store else None,
        "sessions": len(sessions),
    }


@app.get("/health")
async def health(store: Optional[DocumentStore] = Depends(get_store)):
    """
    System health endpoint.

    Delegates to core.health.system_health (store check, uptime, CPU and
    memory).
    """
    return system_health(store)


@app.get("/content")
async def content(store: Optional[DocumentStore] = Depends(get_store)):
    """
    Current portfolio record for the profile view.

    Falls back to the embedded defaults when the store is absent or
    unreadable; ``persistent`` tells the client which one it got.
    """
    content_store = ContentStore(store, debug=False)
    loaded = True
    try:
        content_store.load_content()
    except ContentLoadError:
        loaded = False
    return {
        "persistent": loaded,
        "content": content_store.content.model_dump(),
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("backend.main:app", host=os.getenv("HOST", "127.0.0.1"), port=int(os.getenv("PORT", "8000")))


# --------------------------------------------------------------------------- #
# End of File
# --------------------------------------------------------------------------- #
