"""
Arcade Endpoints
----------------
Game catalogue with live play counts, and the play counter itself.
"""

from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from analytics.arcade import ARCADE_GAMES, STATE_MACHINE, UnknownGame, play_counts, record_play
from backend.dependencies import get_store, require_store
from database.documents import DocumentStore, StoreError

router = APIRouter(prefix="/arcade", tags=["arcade"])


@router.get("/games")
async def list_games(store: Optional[DocumentStore] = Depends(get_store)):
    """Catalogue is always served; counts are best-effort."""
    counts = {}
    if store is not None:
        try:
            counts = play_counts(store)
        except StoreError as e:
            print(f"[Arcade] ⚠️ Play counts unavailable: {e}")
    return [
        {**asdict(game), "state_machine": STATE_MACHINE, "play_count": counts.get(game.id, 0)}
        for game in ARCADE_GAMES
    ]


@router.post("/games/{game_id}/plays")
async def add_play(game_id: str, store: DocumentStore = Depends(require_store)):
    try:
        return {"game_id": game_id, "play_count": record_play(store, game_id)}
    except UnknownGame as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StoreError as e:
        raise HTTPException(status_code=503, detail=str(e))
