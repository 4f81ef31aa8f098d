"""
backend/sessions.py
-------------------
Terminal sessions served over HTTP.

Each session owns one ``CommandInterpreter`` on a virtual-clock scheduler.
Every request runs the scheduler to idle, so a response already holds the
complete output of the command it carried; entries keep their typing
speed and the browser replays the animation.
"""

from __future__ import annotations

import threading
import uuid
from collections import OrderedDict
from datetime import datetime, UTC
from typing import Any, Dict, Optional

from core import config
from core.content_store import ContentStore
from core.interpreter import CommandInterpreter, normalize_command
from core.scheduler import ManualScheduler
from database.documents import DocumentStore


class UnknownSession(LookupError):
    pass


class TerminalSession:
    def __init__(self, store: Optional[DocumentStore], speed: int = config.TYPING_SPEED_MS):
        self.id = uuid.uuid4().hex
        self.created_at = datetime.now(UTC)
        self.scheduler = ManualScheduler()
        self.interpreter = CommandInterpreter(ContentStore(store), scheduler=self.scheduler, speed=speed)
        self.lock = threading.Lock()

    def _settle(self) -> None:
        self.scheduler.run_until_idle()

    def start(self) -> None:
        with self.lock:
            self.interpreter.start()
            self._settle()

    def submit(self, raw: str) -> None:
        with self.lock:
            self.interpreter.submit(normalize_command(raw))
            self._settle()

    def answer(self, answer: Optional[str]) -> None:
        """Raises ``NoPendingPrompt`` if nothing is waiting."""
        with self.lock:
            self.interpreter.answer_prompt(answer)
            self._settle()

    def recall(self, direction: str) -> str:
        with self.lock:
            history = self.interpreter.history
            if direction == "previous":
                return history.previous() or ""
            return history.next()

    def close(self) -> None:
        with self.lock:
            self.interpreter.close()

    def view(self, after_id: int = -1) -> Dict[str, Any]:
        with self.lock:
            interp = self.interpreter
            prompt = interp.pending_prompt
            return {
                "session_id": self.id,
                "state": interp.state.value,
                "persistent": interp.content_store.persistent,
                "pending_prompt": (
                    {"message": prompt.message, "default": prompt.default, "secret": prompt.secret}
                    if prompt else None
                ),
                "entries": interp.display.snapshot(after_id),
            }


class SessionRegistry:
    """Live sessions, oldest evicted first once ``limit`` is reached."""

    def __init__(self, store: Optional[DocumentStore], limit: int = config.SESSION_LIMIT):
        self.store = store
        self.limit = limit
        self._sessions: "OrderedDict[str, TerminalSession]" = OrderedDict()
        self._lock = threading.Lock()

    def create(self) -> TerminalSession:
        session = TerminalSession(self.store)
        with self._lock:
            while len(self._sessions) >= self.limit:
                _, evicted = self._sessions.popitem(last=False)
                evicted.close()
                print(f"[Sessions] ℹ️ Evicted session {evicted.id} (limit {self.limit}).")
            self._sessions[session.id] = session
        session.start()
        return session

    def get(self, session_id: str) -> TerminalSession:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                raise UnknownSession(f"No terminal session '{session_id}'.")
            self._sessions.move_to_end(session_id)
            return session

    def close(self, session_id: str) -> None:
        with self._lock:
            session = self._sessions.pop(session_id, None)
        if session is None:
            raise UnknownSession(f"No terminal session '{session_id}'.")
        session.close()

    def __len__(self) -> int:
        return len(self._sessions)
