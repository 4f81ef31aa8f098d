"""
core/health.py
--------------
System health diagnostics for the portfolio backend.

Purpose
-------
- Used by the FastAPI `/health` endpoint and the Streamlit status badge.
- Checks the document store (SQL or Supabase) through `core.safe_connect`.
- Reports backend uptime, version and CPU/memory usage.
- Returns a JSON-safe dict ready for serialization.
"""

from __future__ import annotations

import time
import platform
import psutil
from typing import Dict, Any, Optional

from core import config
from core.safe_connect import test_connection
from database.documents import DocumentStore


# Cache the process start time for uptime calculation
START_TIME = time.time()


def system_health(store: Optional[DocumentStore]) -> Dict[str, Any]:
    """
    Return structured backend health diagnostics.

    A missing store is not an error (the portfolio runs on embedded
    defaults); an unreachable one degrades the status.
    """
    check = test_connection(store)
    if not check["configured"]:
        status, message = "ok", "Backend operational (no persistence, default content)."
    elif check["connected"]:
        status, message = "ok", "Backend operational."
    else:
        status, message = "degraded", f"{check['backend']} store check failed: {check['error']}"

    # --- System metrics ---
    try:
        cpu_load = psutil.cpu_percent(interval=0.2)
        memory_usage = round(psutil.virtual_memory().used / (1024 * 1024), 2)
    except Exception:  # noqa: BLE001 - metrics are optional
        cpu_load = None
        memory_usage = None

    return {
        "status": status,
        "message": message,
        "version": config.BACKEND_VERSION,
        "store_backend": check["backend"],
        "store_connected": check["connected"],
        "cpu_load": cpu_load,
        "memory_usage": memory_usage,
        "uptime_sec": round(time.time() - START_TIME, 2),
        "system": platform.system(),
        "release": platform.release(),
    }
