"""
core/ui_config.py
-----------------
Central configuration hub for the Streamlit front-end.

- Reads the backend URL from environment variables.
- Replay speed of typed terminal output.
"""

from __future__ import annotations
import os

# ---------------------------------------------------------------------------
# Backend configuration
# ---------------------------------------------------------------------------

BACKEND_URL: str = os.getenv("BACKEND_URL", "http://127.0.0.1:8000").rstrip("/")

# Replay speed for typed terminal output; 0 shows lines at once
UI_TYPING_SPEED_MS: int = int(os.getenv("UI_TYPING_SPEED_MS", os.getenv("TYPING_SPEED_MS", "15")))
