# ui/components/backend_status.py
"""
Backend health indicator for the Streamlit shell.

Features
--------
✅ Type-safe: Uses Pydantic to validate the /health schema.
✅ Caching: st.cache_data with configurable TTL.
✅ Graceful fallback: never crashes the UI when the backend is offline.
"""

from __future__ import annotations

import os
import requests
import streamlit as st
from pydantic import BaseModel, Field
from typing import Optional, Dict, Any

from core.ui_config import BACKEND_URL

CACHE_TTL = int(os.getenv("BACKEND_STATUS_TTL", "60"))  # seconds

STATUS_COLORS = {
    "ok": "green",
    "healthy": "green",
    "degraded": "orange",
    "error": "red",
    "offline": "red",
}


# --------------------------------------------------------------------------- #
# Typed Health Schema
# --------------------------------------------------------------------------- #

class HealthSchema(BaseModel):
    """Structured schema for the /health endpoint response."""
    status: str = Field(default="unknown", description="Overall backend status")
    message: Optional[str] = Field(default=None, description="Optional status message")
    version: Optional[str] = Field(default=None, description="Backend version string")
    store_backend: Optional[str] = Field(default=None, description="SQL | Supabase | None")
    store_connected: Optional[bool] = Field(default=None, description="Document store connectivity flag")
    cpu_load: Optional[float] = Field(default=None, description="Backend CPU load")
    memory_usage: Optional[float] = Field(default=None, description="Backend memory usage in MB")
    latency_ms: Optional[float] = Field(default=None, description="Approximate round-trip latency in ms")

    def color(self) -> str:
        return get_status_color(self.status)


def get_status_color(status: str) -> str:
    return STATUS_COLORS.get(status.lower(), "gray")


# --------------------------------------------------------------------------- #
# Health Fetcher (cached + resilient)
# --------------------------------------------------------------------------- #

@st.cache_data(ttl=CACHE_TTL)
def get_backend_status() -> Dict[str, Any]:
    """
    Fetch the backend /health endpoint with structured fallback.
    """
    url = f"{BACKEND_URL.rstrip('/')}/health"
    try:
        resp = requests.get(url, timeout=5)
        latency_ms = round(resp.elapsed.total_seconds() * 1000, 2)

        if resp.status_code == 200:
            data = resp.json()
            data["latency_ms"] = latency_ms
            return HealthSchema(**data).model_dump()
        return {
            "status": "error",
            "message": f"HTTP {resp.status_code}: {resp.text[:100]}",
        }
    except requests.exceptions.RequestException as e:
        return {
            "status": "offline",
            "message": f"Backend unreachable at {BACKEND_URL} ({e.__class__.__name__})",
        }


# --------------------------------------------------------------------------- #
# UI Renderer
# --------------------------------------------------------------------------- #

def render_status_bar(expanded: bool = False):
    """Render a compact backend health summary in the sidebar."""
    st.sidebar.markdown("---")
    st.sidebar.caption("### 🔍 Backend Status")

    health = get_backend_status()
    status = health.get("status", "unknown")

    st.sidebar.markdown(
        f"<span style='color:{get_status_color(status)}; font-weight:600;'>● {status.upper()}</span>",
        unsafe_allow_html=True,
    )

    msg = health.get("message")
    if msg:
        st.sidebar.caption(f"💬 {msg}")

    backend = health.get("store_backend")
    if backend and health.get("store_connected"):
        st.sidebar.caption(f"🗄️ {backend} store: connected")
    elif backend:
        st.sidebar.caption(f"🗄️ {backend} store: unavailable")
    else:
        st.sidebar.caption("🗄️ No persistence (default content)")

    if expanded:
        with st.sidebar.expander("Advanced diagnostics", expanded=False):
            latency = health.get("latency_ms")
            if latency:
                st.write(f"⏱ Latency: {latency} ms")
            if health.get("cpu_load") is not None:
                st.write(f"🧠 CPU load: {health['cpu_load']}%")
            if health.get("memory_usage") is not None:
                st.write(f"💾 Memory: {health['memory_usage']} MB")
            if health.get("version"):
                st.write(f"🧩 Version: {health['version']}")
            st.json(health)
