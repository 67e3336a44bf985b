# Journal tab: mood check-in, prompt and entry editor.
import streamlit as st

import journal
import moods
import prompts
import session


def _greeting(hour: int) -> str:
    if hour < 12:
        return "Good morning"
    if hour < 17:
        return "Good afternoon"
    return "Good evening"


def render():
    state = session.get_state()
    t = session.now()
    today_entry = next((e for e in state.entries if e.created_at.astimezone(t.tzinfo).date() == t.date()), None)

    st.markdown(f"### {_greeting(t.hour)}")
    st.caption(t.strftime("%A, %B %d, %Y"))
    if today_entry:
        st.success(f"You've already journaled today ({moods.mood_label(today_entry.mood)}). Write again any time.")

    st.markdown("**How are you feeling?**")
    mood = st.radio(
        "Mood",
        options=list(moods.MOOD_KEYS),
        format_func=lambda m: f"{moods.mood_emoji(m)} {moods.mood_label(m)}",
        index=None,
        horizontal=True,
        key="journal_mood",
        label_visibility="collapsed",
    )
    if mood and st.session_state.get("prompt_mood") != mood:
        st.session_state.prompt_mood = mood
        session.refresh_prompt(mood)
        st.rerun()

    st.markdown("**Today's prompt**")
    st.info(session.get_state().current_prompt)
    col1, _ = st.columns([1, 3])
    with col1:
        if st.button("Get another prompt"):
            session.refresh_prompt(mood)
            st.rerun()
    follow_up = prompts.follow_up_prompt(state.entries)
    if follow_up:
        st.caption(follow_up)

    st.markdown("**Your thoughts**")
    content = st.text_area(
        "Journal content",
        placeholder="Write freely. No one else will see this.",
        height=160,
        key="journal_content",
        label_visibility="collapsed",
    )
    if st.button("Save entry", type="primary", disabled=not mood):
        try:
            new_state = journal.add_entry(
                session.get_state(), content, mood, session.now(), prompt=session.get_state().current_prompt
            )
        except ValueError as e:
            st.error(str(e))
        else:
            session.commit(new_state)
            st.session_state.pop("journal_content", None)
            st.session_state.pop("journal_mood", None)
            st.session_state.pop("prompt_mood", None)
            st.toast("Entry saved.")
            st.rerun()
