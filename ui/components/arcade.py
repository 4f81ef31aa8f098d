# ui/components/arcade.py
"""
Embedded arcade player.

Loads a game's animation asset with the Rive web runtime and wires
pointer/keyboard events to state-machine inputs. The event -> input table
comes from ``analytics.arcade`` so the browser never decides it.
"""

from __future__ import annotations

import json
from typing import Any, Dict

import streamlit.components.v1 as components

from analytics.arcade import INPUT_MAP, STATE_MACHINE
from core.ui_config import BACKEND_URL

RIVE_RUNTIME = "https://unpkg.com/@rive-app/canvas"

PLAYER_TEMPLATE = """
<canvas id="game" width="480" height="360" style="width:100%%;background:#0d1117;border-radius:8px"></canvas>
<script src="%(runtime)s"></script>
<script>
  const inputMap = %(input_map)s;
  const canvas = document.getElementById('game');
  const r = new rive.Rive({
    src: %(src)s,
    canvas: canvas,
    autoplay: true,
    stateMachines: %(machine)s,
    onLoad: () => r.resizeDrawingSurfaceToCanvas(),
  });
  function apply(event) {
    const inputs = r.stateMachineInputs(%(machine)s) || [];
    for (const cmd of inputMap[event] || []) {
      const input = inputs.find(i => i.name === cmd.name);
      if (!input) continue;
      if (cmd.op === 'fire') input.fire();
      else input.value = cmd.value;
    }
  }
  canvas.addEventListener('pointerdown', () => apply('pointerdown'));
  canvas.addEventListener('click', () => apply('click'));
  window.addEventListener('keydown', (e) => {
    if (e.code === 'Space') { e.preventDefault(); apply('space'); }
  });
</script>
"""


def render_game(game: Dict[str, Any], height: int = 380) -> None:
    input_map = {event: [c.as_dict() for c in cmds] for event, cmds in INPUT_MAP.items()}
    src = game["asset"]
    if src.startswith("/"):
        src = f"{BACKEND_URL}{src}"
    components.html(
        PLAYER_TEMPLATE % {
            "runtime": RIVE_RUNTIME,
            "input_map": json.dumps(input_map),
            "src": json.dumps(src),
            "machine": json.dumps(STATE_MACHINE),
        },
        height=height,
    )
