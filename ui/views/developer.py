"""
Developer view: the terminal.

The backend owns the interpreter; this view keeps the session id and the
last entry id it has replayed, and draws the display buffer it gets back.
"""

from __future__ import annotations

from typing import Any, MutableMapping

import streamlit as st

from core.display import NAV_COMMANDS
from core.interpreter import normalize_command
from core.ui_config import UI_TYPING_SPEED_MS
from core.ui_helpers import delete_backend, request_backend
from ui.components.terminal_view import render_terminal

STATE_DEFAULTS = {
    "term_session": None,
    "term_view": None,
    "term_seen": 0,
    "term_input": "",
    "term_recall": None,
}


def _init_state() -> None:
    for k, v in STATE_DEFAULTS.items():
        if k not in st.session_state:
            st.session_state[k] = v


def reset_session(state: MutableMapping[str, Any]) -> None:
    """Forget the backend session; the next render opens a fresh one."""
    # term_input belongs to a widget and must not be written after it is drawn
    for k in ("term_session", "term_view", "term_seen", "term_recall"):
        state[k] = STATE_DEFAULTS[k]


def apply_response(state: MutableMapping[str, Any], status: int, view: Any) -> bool:
    """
    Adopt a session view returned by the backend.

    A 404 means the backend no longer knows the session (evicted or
    restarted), so the state is reset. Returns True if ``view`` was adopted.
    """
    if status == 404:
        print(f"[UI] ℹ️ Terminal session {state.get('term_session')} is gone; opening a new one.")
        reset_session(state)
        return False
    if not view:
        return False
    entries = (state.get("term_view") or {}).get("entries", [])
    state["term_seen"] = max((e["id"] for e in entries), default=0)
    state["term_view"] = view
    return True


def _open_session() -> None:
    _, view = request_backend("POST", "/terminal/sessions")
    if view:
        st.session_state.term_session = view["session_id"]
        st.session_state.term_view = view
        st.session_state.term_seen = 0


def close_session() -> None:
    """Close the backend session when the visitor leaves the terminal."""
    sid = st.session_state.get("term_session")
    if sid is not None:
        delete_backend(f"/terminal/sessions/{sid}")
    reset_session(st.session_state)


def _post(path: str, payload: dict) -> None:
    sid = st.session_state.term_session
    status, view = request_backend("POST", f"/terminal/sessions/{sid}/{path}", payload)
    if not apply_response(st.session_state, status, view) and status != 404:
        st.error("Terminal backend unavailable. Try again in a moment.")


def _run(command: str) -> None:
    _post("commands", {"command": normalize_command(command)})


def _answer(answer: str | None) -> None:
    _post("prompt", {"answer": answer})


def _recall(direction: str) -> None:
    sid = st.session_state.term_session
    status, data = request_backend("GET", f"/terminal/sessions/{sid}/history/{direction}")
    if status == 404:
        reset_session(st.session_state)
    elif isinstance(data, dict):
        st.session_state.term_recall = data.get("command", "")


def render() -> None:
    _init_state()
    st.title("💻 Terminal")

    if st.session_state.term_session is None:
        _open_session()
    view = st.session_state.term_view
    if not view:
        st.warning("Terminal backend unavailable. Check BACKEND_URL and try again.")
        if st.button("Retry"):
            st.rerun()
        return

    # --- Nav bar (same commands as the header line) ---
    cols = st.columns(len(NAV_COMMANDS))
    for col, name in zip(cols, NAV_COMMANDS):
        if col.button(name, key=f"nav_{name}", use_container_width=True):
            _run(name)
            st.rerun()

    render_terminal(view["entries"], st.session_state.term_seen, UI_TYPING_SPEED_MS)

    prompt = view.get("pending_prompt")
    if prompt:
        # --- Edit flow waiting for an answer ---
        with st.form("prompt_form", clear_on_submit=True):
            st.markdown(f"**{prompt['message']}**".replace("\n", "  \n"))
            answer = st.text_input(
                "Answer",
                value=prompt.get("default") or "",
                type="password" if prompt.get("secret") else "default",
                label_visibility="collapsed",
            )
            ok, cancel = st.columns(2)
            submitted = ok.form_submit_button("OK")
            cancelled = cancel.form_submit_button("Cancel")
        if submitted or cancelled:
            _answer(None if cancelled else answer)
            st.rerun()
        return

    # --- Command line ---
    if st.session_state.term_recall is not None:
        st.session_state.term_input = st.session_state.term_recall
        st.session_state.term_recall = None
    with st.form("command_form", clear_on_submit=True):
        command = st.text_input("$", key="term_input", placeholder="type a command, e.g. help")
        run, prev, nxt = st.columns([4, 1, 1])
        submitted = run.form_submit_button("Run")
        go_prev = prev.form_submit_button("↑")
        go_next = nxt.form_submit_button("↓")
    if go_prev or go_next:
        _recall("previous" if go_prev else "next")
        st.rerun()
    if submitted:
        _run(command)
        st.rerun()
