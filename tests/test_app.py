"""Smoke tests: every tab renders without raising, empty and with demo data."""

from datetime import datetime
from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

import db
import demo
from prompts import PROMPT_POOLS

APP_PATH = Path(__file__).resolve().parent.parent / "app.py"


def _run(page=None):
    at = AppTest.from_file(str(APP_PATH), default_timeout=30)
    if page:
        at.session_state["page"] = page
    return at.run()


@pytest.mark.usefixtures("temp_db")
class TestApp:
    def test_first_run_shows_journal(self):
        at = _run()
        assert not at.exception
        assert any("Reflect" in m.value for m in at.markdown)
        assert at.session_state["page"] == "Journal"

    @pytest.mark.parametrize("page", ["Journal", "Insights", "History", "Settings"])
    def test_tabs_render_empty(self, page):
        assert not _run(page).exception

    @pytest.mark.parametrize("page", ["Journal", "Insights", "History", "Settings"])
    def test_tabs_render_with_demo_data(self, page):
        db.save_entries(demo.demo_entries(datetime.now().astimezone()))
        assert not _run(page).exception

    def test_choosing_a_mood_refreshes_prompt_from_pools(self):
        at = _run()
        at.radio(key="journal_mood").set_value("struggling").run()
        assert not at.exception
        assert at.info[0].value in PROMPT_POOLS["low_mood"]

    def test_demo_data_needs_confirmation(self):
        at = _run("Settings")
        at.button(key="demo_btn").click().run()
        assert not at.exception
        assert db.load_entries() == []
        assert any("demo entries" in w.value for w in at.warning)

        at.button(key="demo_confirm_btn").click().run()
        assert not at.exception
        assert len(db.load_entries()) == len(demo.DEMO_SEED)

    def test_demo_data_cancel(self):
        at = _run("Settings")
        at.button(key="demo_btn").click().run()
        at.button(key="demo_cancel").click().run()
        assert not at.exception
        assert db.load_entries() == []
