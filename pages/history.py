# History tab: search, mood filter, grouped entries, delete.
import streamlit as st

import insights
import journal
import moods
import sentiment
import session

EMOJI = {"positive": "☺️", "neutral": "😐", "negative": "☹️"}


def _entry_time(entry, t) -> str:
    local = insights.local_time(entry.created_at, t)
    if local.date() == t.date():
        return local.strftime("%I:%M %p").lstrip("0")
    return local.strftime("%b %d, %Y • %I:%M %p")


def _render_entry(entry, t):
    label = f"{moods.mood_emoji(entry.mood)} {_entry_time(entry, t)}: {entry.content[:60]}"
    with st.expander(label):
        if entry.prompt:
            st.caption(entry.prompt)
        st.write(entry.content)
        score = insights.entry_sentiment(entry)
        st.caption(
            f"Mood: {moods.mood_label(entry.mood)} · Positivity: {insights.to_percent(score)}% "
            f"{EMOJI[sentiment.sentiment_label(score)]}"
        )
        if entry.themes:
            st.caption("Themes: " + ", ".join(entry.themes))
        confirm_key = f"confirm_delete_{entry.id}"
        if not st.session_state.get(confirm_key):
            if st.button("Delete", key=f"del_{entry.id}"):
                st.session_state[confirm_key] = True
                st.rerun()
        else:
            st.warning("Delete this entry? This cannot be undone.")
            col1, col2 = st.columns(2)
            with col1:
                if st.button("Yes, delete", key=f"del_yes_{entry.id}"):
                    session.commit(journal.delete_entry(session.get_state(), entry.id, session.now()))
                    st.session_state.pop(confirm_key, None)
                    st.rerun()
            with col2:
                if st.button("Cancel", key=f"del_no_{entry.id}"):
                    st.session_state.pop(confirm_key, None)
                    st.rerun()


def render():
    state = session.get_state()
    t = session.now()
    st.markdown("### History")
    if not state.entries:
        st.caption("No entries yet. Your first one is waiting on the Journal tab.")
        return

    query = st.text_input("Search", placeholder="Search your entries", key="history_query")
    mood = st.selectbox(
        "Mood",
        options=[None, *moods.MOOD_KEYS],
        format_func=lambda m: "All moods" if m is None else f"{moods.mood_emoji(m)} {moods.mood_label(m)}",
        key="history_mood",
    )
    shown = journal.filter_entries(state.entries, query, mood)
    if query or mood:
        st.caption(f"Showing {len(shown)} of {len(state.entries)} entries")
    if not shown:
        st.caption("No entries match your search.")
        return
    for label, group in journal.group_entries(shown, t).items():
        st.markdown(f"**{label}**")
        for entry in group:
            _render_entry(entry, t)
