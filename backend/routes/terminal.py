"""
Terminal Session Endpoints
--------------------------
Drive a command interpreter over HTTP: open a session, submit commands,
answer edit prompts, walk the command history.
"""

from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from backend.dependencies import get_sessions
from backend.sessions import SessionRegistry, TerminalSession, UnknownSession
from core.interpreter import NoPendingPrompt

router = APIRouter(prefix="/terminal", tags=["terminal"])


class CommandRequest(BaseModel):
    command: str


class PromptAnswer(BaseModel):
    answer: Optional[str] = None   # null = cancelled


def _session(session_id: str, sessions: SessionRegistry) -> TerminalSession:
    try:
        return sessions.get(session_id)
    except UnknownSession as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/sessions", status_code=201)
async def open_session(sessions: SessionRegistry = Depends(get_sessions)):
    """Open a session; the response already holds the welcome and connection lines."""
    return sessions.create().view()


@router.get("/sessions/{session_id}")
async def read_session(session_id: str, after: int = -1, sessions: SessionRegistry = Depends(get_sessions)):
    return _session(session_id, sessions).view(after)


@router.delete("/sessions/{session_id}", status_code=204)
async def close_session(session_id: str, sessions: SessionRegistry = Depends(get_sessions)):
    try:
        sessions.close(session_id)
    except UnknownSession as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/sessions/{session_id}/commands")
async def submit_command(
    session_id: str,
    request: CommandRequest,
    after: int = -1,
    sessions: SessionRegistry = Depends(get_sessions),
):
    session = _session(session_id, sessions)
    session.submit(request.command)
    return session.view(after)


@router.post("/sessions/{session_id}/prompt")
async def answer_prompt(
    session_id: str,
    request: PromptAnswer,
    after: int = -1,
    sessions: SessionRegistry = Depends(get_sessions),
):
    session = _session(session_id, sessions)
    try:
        session.answer(request.answer)
    except NoPendingPrompt as e:
        raise HTTPException(status_code=409, detail=str(e))
    return session.view(after)


@router.get("/sessions/{session_id}/history/{direction}")
async def recall_history(
    session_id: str,
    direction: Literal["previous", "next"],
    sessions: SessionRegistry = Depends(get_sessions),
):
    return {"command": _session(session_id, sessions).recall(direction)}
