"""
Portfolio Terminal — Streamlit Launcher
---------------------------------------
View shell: landing -> developer (terminal) | profile (visitor view).
The active view lives in ``st.session_state.mode``.

$ streamlit run ui/app.py
"""

import sys, os
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import streamlit as st

from core.metadata import get_metadata
from ui.components.backend_status import render_status_bar
from ui.views import developer, landing, profile

MODES = {
    "landing": landing.render,
    "developer": developer.render,
    "profile": profile.render,
}

meta = get_metadata()
st.set_page_config(page_title=meta["project"], page_icon="💻", layout="wide")

if "mode" not in st.session_state:
    st.session_state.mode = "landing"

with st.sidebar:
    st.caption(meta["project"])
    if st.session_state.mode != "landing" and st.button("⬅ Back to start"):
        if st.session_state.mode == "developer":
            developer.close_session()
        st.session_state.mode = "landing"
        st.rerun()
render_status_bar(expanded=False)

MODES.get(st.session_state.mode, landing.render)()

st.caption(f"© {meta['maintainer']} · {meta['project']} v{meta['version']}")
