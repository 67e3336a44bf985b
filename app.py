# Reflect: entry point, config, header, tab routing.
from pathlib import Path

import streamlit as st

import config
import db
import journal
import moods
import session

APP_NAME = "Reflect"
TAGLINE = "A quiet place to write, with gentle insights over time"
FOOTER_TEXT = "All journal entries are stored locally on your device."
NAV_TABS = ["Journal", "Insights", "History", "Settings"]
DARK_CSS = """
.stApp { background-color: #1f2421; color: #e3e7e3; }
.stApp p, .stApp label, .stApp h1, .stApp h2, .stApp h3 { color: #e3e7e3; }
"""

config.setup_logging()

st.set_page_config(
    page_title=APP_NAME,
    page_icon="🪶",
    layout="centered",
    initial_sidebar_state="collapsed",
)
_css_path = Path(__file__).resolve().parent / "styles.css"
if _css_path.exists():
    st.markdown(f"<style>\n{_css_path.read_text()}\n</style>", unsafe_allow_html=True)
if db.get_dark_mode():
    st.markdown(f"<style>\n{DARK_CSS}\n</style>", unsafe_allow_html=True)

if "page" not in st.session_state:
    st.session_state.page = "Journal"

# Insights depend on the clock as well as the entries, so refresh them every run.
_state = session.get_state()
st.session_state.journal = journal.replace_entries(_state, _state.entries, session.now())


def _render_header():
    state = session.get_state()
    streak = state.insights.streak if state.insights else 0
    top_col1, top_col2 = st.columns([3, 1])
    with top_col1:
        st.markdown(f"# {APP_NAME}")
        st.markdown(f'<p class="tagline">{TAGLINE}</p>', unsafe_allow_html=True)
    with top_col2:
        st.markdown(f"**🔥 {streak}**")
        if state.entries:
            latest = state.entries[0]
            st.caption(f"Last mood: {moods.mood_emoji(latest.mood)} {moods.mood_label(latest.mood)}")
    with st.container(key="nav_tabs"):
        tab_cols = st.columns(len(NAV_TABS))
        for i, tab in enumerate(NAV_TABS):
            with tab_cols[i]:
                is_active = st.session_state.page == tab
                if st.button(tab, key=f"nav_{tab}", type="primary" if is_active else "secondary"):
                    st.session_state.page = tab
                    st.rerun()
    st.markdown('<hr class="nav-tabs-separator" />', unsafe_allow_html=True)


def main():
    _render_header()
    page = st.session_state.page
    if page == "Journal":
        from pages import journal as journal_page
        journal_page.render()
    elif page == "Insights":
        from pages import insights
        insights.render()
    elif page == "History":
        from pages import history
        history.render()
    else:
        from pages import settings
        settings.render()
    st.caption(FOOTER_TEXT)


if __name__ == "__main__":
    main()
