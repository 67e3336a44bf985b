# Settings tab: AI key, appearance, export/import, demo data, data reset.
import streamlit as st

import db
import demo
import journal
import session


def render():
    st.markdown("### Settings")
    st.caption("App and data options.")

    st.markdown("### AI")
    st.caption(
        "Add an OpenAI API key for AI-written prompts and reflections. "
        "Only short excerpts and summary stats are sent. Everything works without it."
    )
    stored_key = db.get_api_key()
    new_key = st.text_input("API key", type="password", placeholder="sk-...", key="api_key_input")
    col1, col2 = st.columns(2)
    with col1:
        if st.button("Save key", key="save_key"):
            try:
                db.set_api_key(new_key)
                st.success("Key saved.")
            except ValueError as e:
                st.error(str(e))
    with col2:
        if stored_key and st.button("Remove key", key="remove_key"):
            db.remove_api_key()
            st.rerun()

    st.markdown("### Appearance")
    dark = st.toggle("Dark mode", value=db.get_dark_mode(), key="dark_mode_toggle")
    if dark != db.get_dark_mode():
        db.set_dark_mode(dark)
        st.rerun()

    state = session.get_state()
    t = session.now()

    st.markdown("### Export your data")
    st.caption("Download all entries as JSON.")
    st.download_button(
        "Download JSON",
        data=journal.export_entries(state.entries),
        file_name=f"reflect-export-{t.strftime('%Y-%m-%d')}.json",
        mime="application/json",
        key="download_export",
        disabled=not state.entries,
    )

    st.markdown("### Import data")
    st.caption("Import from a previously exported JSON. Entries you already have are skipped.")
    uploaded = st.file_uploader("Choose a JSON file", type=["json"], key="import_file")
    if uploaded and st.button("Import from JSON", key="import_btn"):
        try:
            new_state, imported = journal.import_entries(state, uploaded.read().decode("utf-8"), t)
        except (ValueError, UnicodeDecodeError) as e:
            st.error(str(e))
        else:
            session.commit(new_state)
            st.success(f"Imported {imported} entries.")
            st.rerun()

    st.markdown("### Demo data")
    if "demo_confirm" not in st.session_state:
        st.session_state.demo_confirm = False
    if st.button("Load demo data (14 sample entries)", key="demo_btn"):
        st.session_state.demo_confirm = True
    if st.session_state.demo_confirm:
        st.warning("Replace your current entries with 14 demo entries?")
        col1, col2 = st.columns(2)
        with col1:
            if st.button("Yes, load demo data", key="demo_confirm_btn"):
                session.commit(demo.seed_state(t, prompt=state.current_prompt))
                st.session_state.demo_confirm = False
                st.rerun()
        with col2:
            if st.button("Cancel", key="demo_cancel"):
                st.session_state.demo_confirm = False
                st.rerun()

    st.markdown("### Delete all data")
    st.caption("Permanently delete all entries. Export first. This cannot be undone.")
    if "delete_confirm" not in st.session_state:
        st.session_state.delete_confirm = False
    if st.button("Delete all data", key="delete_btn", disabled=not state.entries):
        st.session_state.delete_confirm = True
    if st.session_state.delete_confirm:
        st.warning("Permanently delete all entries?")
        col1, col2 = st.columns(2)
        with col1:
            if st.button("Yes, delete everything", key="delete_confirm_btn"):
                db.clear_entries()
                st.session_state.journal = journal.replace_entries(state, (), t)
                st.session_state.delete_confirm = False
                st.rerun()
        with col2:
            if st.button("Cancel", key="delete_cancel"):
                st.session_state.delete_confirm = False
                st.rerun()
