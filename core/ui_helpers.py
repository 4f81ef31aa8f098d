"""
core/ui_helpers.py
------------------
Shared backend request helpers for the Streamlit views.
Ensures consistent error handling; only slow-changing data is cached.
"""

from __future__ import annotations
import requests
import streamlit as st
from core.ui_config import BACKEND_URL


def _url(endpoint: str) -> str:
    return f"{BACKEND_URL.rstrip('/')}/{endpoint.lstrip('/')}"


def _detail(resp: requests.Response) -> str:
    if resp.headers.get("content-type", "").startswith("application/json"):
        return str(resp.json().get("detail", resp.text))
    return resp.text


def fetch_backend(endpoint: str, params: dict | None = None) -> dict | list:
    """
    Unified safe fetch for GET endpoints.
    Automatically prefixes BACKEND_URL and handles JSON decoding.
    """
    try:
        resp = requests.get(_url(endpoint), params=params, timeout=10)
        resp.raise_for_status()
        return resp.json()
    except Exception as e:
        st.error(f"Backend request failed: {e}")
        return {}


@st.cache_data(ttl=60)
def fetch_backend_cached(endpoint: str) -> dict | list:
    """Cached GET for data that changes rarely (portfolio content, game list)."""
    return fetch_backend(endpoint)


def request_backend(method: str, endpoint: str, payload: dict | None = None) -> tuple[int, dict | list]:
    """
    Send a request and return ``(status_code, json)``.

    Status 0 means the backend could not be reached. Callers decide what
    an error status means for them; nothing is shown here.
    """
    try:
        resp = requests.request(method, _url(endpoint), json=payload, timeout=30)
    except requests.exceptions.RequestException as e:
        print(f"[UI] ⚠️ {method} {endpoint} failed: {e}")
        return 0, {}
    if resp.status_code >= 400:
        print(f"[UI] ⚠️ {method} {endpoint} → HTTP {resp.status_code}: {_detail(resp)}")
        return resp.status_code, {}
    if resp.status_code == 204 or not resp.content:
        return resp.status_code, {}
    return resp.status_code, resp.json()


def post_backend(endpoint: str, payload: dict | None = None) -> dict:
    """Unified POST helper. Error details from the backend are shown verbatim."""
    try:
        resp = requests.post(_url(endpoint), json=payload or {}, timeout=30)
        if resp.status_code >= 400:
            st.error(f"Backend POST failed: {_detail(resp)}")
            return {}
        return resp.json()
    except Exception as e:
        st.error(f"Backend POST failed: {e}")
        return {}


def delete_backend(endpoint: str) -> bool:
    status, _ = request_backend("DELETE", endpoint)
    return 0 < status < 400
