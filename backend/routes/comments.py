"""
Comment Wall Endpoints
----------------------
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from backend.dependencies import require_store
from core.comments import CommentRejected, add_comment, list_comments
from database.documents import DocumentStore, StoreError

router = APIRouter(prefix="/comments", tags=["comments"])


class CommentRequest(BaseModel):
    name: Optional[str] = None
    message: str


@router.get("")
async def get_comments(
    limit: Optional[int] = Query(None, ge=1, le=500, description="Newest N comments"),
    store: DocumentStore = Depends(require_store),
):
    try:
        return [c.model_dump(mode="json") for c in list_comments(store, limit)]
    except StoreError as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.post("", status_code=201)
async def post_comment(request: CommentRequest, store: DocumentStore = Depends(require_store)):
    try:
        return add_comment(store, request.name, request.message).model_dump(mode="json")
    except CommentRejected as e:
        raise HTTPException(status_code=422, detail=str(e))
    except StoreError as e:
        raise HTTPException(status_code=503, detail=str(e))
