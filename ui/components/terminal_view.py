# ui/components/terminal_view.py
"""
Renders terminal display entries as a single HTML block.

Entries arrive fully typed from the backend; new plain entries are replayed
character by character in the browser at their own speed, everything
already seen is shown at once.
"""

from __future__ import annotations

import html
import json
from typing import Any, Dict, List

import streamlit.components.v1 as components

TERMINAL_CSS = """
<style>
  body { margin: 0; background: #0d1117; }
  #term { font-family: 'Fira Code', monospace; font-size: 14px; color: #c9d1d9;
          padding: 12px; white-space: pre-wrap; height: 100%; overflow-y: auto; }
  .header { color: #58a6ff; margin-bottom: 8px; }
  .echo::before { content: '$ '; color: #3fb950; }
  .echo { color: #e6edf3; }
  a { color: #58a6ff; }
  .text-yellow-400 { color: #facc15; }
  .text-green-400 { color: #4ade80; }
  .text-red-500 { color: #ef4444; }
</style>
"""

REPLAY_JS = """
<script>
  const pending = %s;
  function typeNext(i) {
    if (i >= pending.length) return;
    const item = pending[i];
    const el = document.getElementById('entry-' + item.id);
    let pos = 0;
    function step() {
      if (pos <= item.text.length) {
        el.textContent = item.text.slice(0, pos++);
        document.getElementById('term').scrollTop = 1e9;
        setTimeout(step, item.speed);
      } else {
        typeNext(i + 1);
      }
    }
    step();
  }
  typeNext(0);
</script>
"""


def _entry_html(entry: Dict[str, Any], replay: bool) -> str:
    kind = entry["kind"]
    if kind == "rich":
        return f"<div class='rich'>{entry['content']}</div>"
    if kind in ("echo", "header"):
        # echo text is already escaped by the interpreter
        text = entry["text"] if kind == "echo" else html.escape(entry["text"])
        return f"<div class='{kind}'>{text}</div>"
    body = "" if replay else html.escape(entry["text"])
    return f"<div class='plain' id='entry-{entry['id']}'>{body}</div>"


def _script_json(value: Any) -> str:
    # "</" would end the surrounding <script> element early
    return json.dumps(value).replace("</", "<\\/")


def build_terminal_html(entries: List[Dict[str, Any]], seen_id: int, speed: int) -> str:
    """
    HTML for the terminal. Plain entries with ``id > seen_id`` are replayed
    at ``speed`` ms per character (0 disables replay).
    """
    replay = [
        {"id": e["id"], "text": e["text"], "speed": speed}
        for e in entries
        if e["kind"] == "plain" and e["id"] > seen_id and speed > 0
    ]
    replay_ids = {r["id"] for r in replay}
    body = "".join(_entry_html(e, e["id"] in replay_ids) for e in entries)
    script = REPLAY_JS % _script_json(replay) if replay else ""
    return f"{TERMINAL_CSS}<div id='term'>{body}</div>{script}"


def render_terminal(entries: List[Dict[str, Any]], seen_id: int, speed: int, height: int = 480) -> None:
    components.html(build_terminal_html(entries, seen_id, speed), height=height, scrolling=False)
