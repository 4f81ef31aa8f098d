"""Landing view: choose between the terminal and the profile."""

import streamlit as st

from core.portfolio import OWNER_NAME, OWNER_TITLE


def _go(mode: str) -> None:
    st.session_state.mode = mode
    st.rerun()


def render() -> None:
    st.title(f"👋 {OWNER_NAME}")
    st.caption(OWNER_TITLE)
    st.markdown("How would you like to look around?")

    left, right = st.columns(2)
    with left:
        st.markdown("### 💻 Developer")
        st.write("An interactive terminal. Type `help` to begin.")
        if st.button("Open terminal", use_container_width=True):
            _go("developer")
    with right:
        st.markdown("### 🙂 Visitor")
        st.write("Skills, projects, contact and a small arcade.")
        if st.button("View profile", use_container_width=True):
            _go("profile")
