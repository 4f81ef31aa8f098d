"""
Engagement Endpoints
--------------------
Like / view counters of the contact section.

The one-view / one-like guard lives with the visitor (browser session);
these endpoints only perform the transactional increments.
"""

from fastapi import APIRouter, Depends, HTTPException

from analytics.engagement import increment_stat, read_stats
from backend.dependencies import require_store
from database.documents import DocumentStore, StoreError

router = APIRouter(prefix="/engagement", tags=["engagement"])


def _increment(store: DocumentStore, counter: str) -> dict:
    try:
        return increment_stat(store, counter).model_dump()
    except StoreError as e:
        print(f"[Engagement] ⚠️ {counter} increment failed: {e}")
        raise HTTPException(status_code=503, detail=f"Could not record {counter[:-1]}: {e}")


@router.get("/stats")
async def get_stats(store: DocumentStore = Depends(require_store)):
    try:
        return read_stats(store).model_dump()
    except StoreError as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.post("/views")
async def add_view(store: DocumentStore = Depends(require_store)):
    return _increment(store, "views")


@router.post("/likes")
async def add_like(store: DocumentStore = Depends(require_store)):
    return _increment(store, "likes")
