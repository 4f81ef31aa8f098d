"""
Profile view for visitors.

Skills, projects and contact come from ``/content``. The contact section
counts one view per browser session and allows one like; both flags sit in
``st.session_state`` under the same keys the counters module names.
"""

from __future__ import annotations

import pandas as pd
import streamlit as st

from analytics.engagement import LIKED_FLAG, VIEWED_FLAG, VisitorFlags, record_like, record_view
from core.ui_helpers import fetch_backend, fetch_backend_cached, post_backend
from ui.components.arcade import render_game


def _flags() -> VisitorFlags:
    return VisitorFlags(
        viewed=st.session_state.get(VIEWED_FLAG, False),
        liked=st.session_state.get(LIKED_FLAG, False),
    )


def _store_flags(flags: VisitorFlags) -> None:
    st.session_state[VIEWED_FLAG] = flags.viewed
    st.session_state[LIKED_FLAG] = flags.liked


def _skills(content: dict) -> None:
    st.subheader("🧰 Skills")
    skills = content.get("skills") or []
    if not skills:
        st.info("No skills found.")
        return
    df = pd.DataFrame(
        [{"Category": s["category"], "Skills": s.get("items", "")} for s in skills]
    )
    st.dataframe(df, hide_index=True, use_container_width=True)


def _projects(content: dict) -> None:
    st.subheader("🚀 Projects")
    projects = content.get("projects") or []
    if not projects:
        st.info("No projects found.")
        return
    for p in projects:
        with st.container(border=True):
            link = p.get("link")
            st.markdown(f"**[{p['name']}]({link})**" if link else f"**{p['name']}**")
            if p.get("description"):
                st.write(p["description"])


def _engagement() -> None:
    flags = _flags()
    if not flags.viewed:
        record_view(flags, lambda: post_backend("/engagement/views"))
        _store_flags(flags)

    stats = fetch_backend("/engagement/stats") or {}
    c1, c2, c3 = st.columns([1, 1, 2])
    c1.metric("👀 Views", stats.get("views", 0))
    c2.metric("❤️ Likes", stats.get("likes", 0))
    with c3:
        if flags.liked:
            st.button("❤️ Liked", disabled=True)
        elif st.button("🤍 Like"):
            record_like(flags, lambda: post_backend("/engagement/likes"))
            _store_flags(flags)
            st.rerun()


def _contact(content: dict) -> None:
    st.subheader("📬 Contact")
    for channel, value in (content.get("contact") or {}).items():
        st.markdown(f"- **{channel.capitalize()}**: {value}")
    _engagement()


def _comments() -> None:
    st.subheader("💬 Comments")
    with st.form("comment_form", clear_on_submit=True):
        name = st.text_input("Name (optional)")
        message = st.text_area("Message")
        if st.form_submit_button("Post"):
            if post_backend("/comments", {"name": name, "message": message}):
                st.success("Thanks for the note!")

    comments = fetch_backend("/comments", params={"limit": 50})
    if not comments:
        st.caption("No comments yet.")
        return
    for c in comments:
        when = (c.get("created_at") or "")[:16].replace("T", " ")
        st.markdown(f"**{c['name']}** · _{when}_  \n{c['message']}")


def _arcade() -> None:
    st.subheader("🕹️ Arcade")
    games = fetch_backend_cached("/arcade/games")
    if not games:
        st.caption("Arcade unavailable.")
        return

    cols = st.columns(len(games))
    for col, game in zip(cols, games):
        with col:
            st.markdown(f"**{game['name']}**")
            st.caption(game["description"])
            st.caption(f"▶ {game.get('play_count', 0)} plays")
            if st.button("Play", key=f"play_{game['id']}"):
                post_backend(f"/arcade/games/{game['id']}/plays")
                st.session_state.arcade_game = game
                fetch_backend_cached.clear()

    game = st.session_state.get("arcade_game")
    if game:
        st.markdown(f"#### {game['name']}")
        render_game(game)


def render() -> None:
    data = fetch_backend_cached("/content") or {}
    content = data.get("content", {})
    st.title("🙂 Profile")
    if content.get("about"):
        st.write(content["about"])

    _skills(content)
    _projects(content)
    _contact(content)
    _comments()
    _arcade()
