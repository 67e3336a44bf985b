# Streamlit session plumbing: clock, current journal snapshot, persistence on change.
from datetime import datetime

import streamlit as st

import db
import journal
import llm
import prompts


def now() -> datetime:
    return datetime.now().astimezone()


def local_selector() -> prompts.PromptSelector:
    if "prompt_selector" not in st.session_state:
        st.session_state.prompt_selector = prompts.PromptSelector()
    return st.session_state.prompt_selector


def get_state() -> journal.JournalState:
    if "journal" not in st.session_state:
        t = now()
        state = journal.initial_state(db.load_entries(), t)
        st.session_state.journal = journal.with_prompt(state, local_selector().select(t.hour))
        st.session_state.prompt_refresh = llm.PromptRefresh(st.session_state.journal.current_prompt)
    return st.session_state.journal


def commit(state: journal.JournalState) -> None:
    """Store the new snapshot and rewrite the persisted entries."""
    db.save_entries(state.entries)
    st.session_state.journal = state


def prompt_selector(entries) -> prompts.PromptSource:
    return llm.prompt_selector(entries, fallback=local_selector())


def refresh_prompt(recent_mood: str | None = None) -> str:
    """Replace the displayed prompt unless a newer refresh has started meanwhile."""
    state = get_state()
    t = now()
    refresh = st.session_state.prompt_refresh
    token = refresh.begin()
    new_state = journal.refresh_prompt(state, prompt_selector(state.entries), t.hour, recent_mood)
    if refresh.resolve(token, llm.RemoteResult.succeeded(new_state.current_prompt)):
        st.session_state.journal = new_state
    return st.session_state.journal.current_prompt
