# tests/test_ui_views.py
"""Terminal rendering and session bookkeeping of the Streamlit views."""

from unittest.mock import MagicMock

import requests

from core import ui_helpers
from core.ui_helpers import delete_backend, request_backend
from tests.conftest import Terminal
from ui.components.terminal_view import build_terminal_html
from ui.views.developer import STATE_DEFAULTS, apply_response, reset_session


def test_replayed_output_cannot_close_the_script(store):
    term = Terminal(store)
    term.run("</script><script>alert(1)</script>")
    page = build_terminal_html(term.interp.display.snapshot(), 0, 15)
    assert page.count("</script>") == 1
    assert "<\\/script>" in page


def test_seen_entries_are_not_replayed(store):
    term = Terminal(store)
    term.run("foo")
    entries = term.interp.display.snapshot()
    last = max(e["id"] for e in entries)
    page = build_terminal_html(entries, last, 15)
    assert "<script>" not in page
    assert "bash: command not found: foo" in page


def _state(**overrides):
    state = dict(STATE_DEFAULTS)
    state.update(overrides)
    return state


def test_missing_session_resets_state():
    state = _state(
        term_session="abc",
        term_view={"entries": [{"id": 3}]},
        term_seen=3,
        term_input="about",
        term_recall="skills",
    )
    assert apply_response(state, 404, {"detail": "Unknown session"}) is False
    assert state["term_session"] is None
    assert state["term_view"] is None
    assert state["term_seen"] == 0
    assert state["term_recall"] is None
    # widget-owned key untouched
    assert state["term_input"] == "about"


def test_new_view_is_adopted():
    state = _state(term_session="abc", term_view={"entries": [{"id": 1}, {"id": 4}]})
    view = {"session_id": "abc", "entries": [{"id": 1}, {"id": 4}, {"id": 5}]}
    assert apply_response(state, 200, view) is True
    assert state["term_view"] is view
    assert state["term_seen"] == 4
    assert state["term_session"] == "abc"


def test_failed_request_keeps_state():
    view = {"entries": [{"id": 2}]}
    state = _state(term_session="abc", term_view=view, term_seen=1)
    assert apply_response(state, 0, {}) is False
    assert state["term_view"] is view
    assert state["term_session"] == "abc"


def test_reset_session_restores_defaults():
    state = _state(term_session="abc", term_seen=9)
    reset_session(state)
    assert state["term_session"] is None and state["term_seen"] == 0


def _response(status, body=b""):
    resp = MagicMock(status_code=status, content=body, headers={"content-type": "application/json"})
    resp.json.return_value = {"detail": "Unknown session"}
    return resp


def test_delete_backend_reports_outcome(monkeypatch):
    calls = []

    def fake_request(method, url, **kwargs):
        calls.append((method, url))
        return _response(204) if len(calls) == 1 else _response(404, b"{}")

    monkeypatch.setattr(ui_helpers.requests, "request", fake_request)
    assert delete_backend("/terminal/sessions/abc") is True
    assert delete_backend("/terminal/sessions/abc") is False
    assert calls[0][0] == "DELETE" and calls[0][1].endswith("/terminal/sessions/abc")


def test_unreachable_backend_is_status_zero(monkeypatch):
    def fake_request(method, url, **kwargs):
        raise requests.exceptions.ConnectionError("refused")

    monkeypatch.setattr(ui_helpers.requests, "request", fake_request)
    assert request_backend("GET", "/health") == (0, {})
    assert delete_backend("/terminal/sessions/abc") is False
