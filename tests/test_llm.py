"""Tests for remote enrichment and its local fallbacks, using a fake OpenAI client."""

import random
from types import SimpleNamespace

import pytest

import config
import journal
import llm
import summary
from insights import aggregate
from prompts import PROMPT_POOLS, PromptSelector


class FakeClient:
    """Mimics ``client.chat.completions.create`` and records each call."""

    def __init__(self, text="A gentle question?", error=None, choices=None):
        self.calls = []
        self._text = text
        self._error = error
        self._choices = choices
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    def _create(self, **kwargs):
        self.calls.append(kwargs)
        if self._error:
            raise self._error
        if self._choices is not None:
            return SimpleNamespace(choices=self._choices)
        message = SimpleNamespace(content=self._text)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


@pytest.fixture
def entries(make_entry):
    return [
        make_entry("Stress about the deadline at work", mood="low"),
        make_entry("Walk in the park with my sister", mood="good", days_ago=1),
        make_entry("Quiet day", mood="okay", days_ago=2),
    ]


class TestComplete:
    def test_success(self):
        client = FakeClient("  Hello there  ")
        result = llm.complete("sys", [{"role": "user", "content": "hi"}], 50, client=client)
        assert result.ok
        assert result.text == "Hello there"
        call = client.calls[0]
        assert call["max_tokens"] == 50
        assert call["messages"][0] == {"role": "system", "content": "sys"}
        assert call["messages"][1]["content"] == "hi"

    def test_model_from_environment(self, monkeypatch):
        monkeypatch.setenv("REFLECT_MODEL", "my-model")
        client = FakeClient()
        llm.complete("sys", [], 10, client=client)
        assert client.calls[0]["model"] == "my-model"

    def test_exception_becomes_failure(self):
        result = llm.complete("sys", [], 10, client=FakeClient(error=RuntimeError("boom")))
        assert result.status == "failed"
        assert result.reason == "boom"

    def test_unexpected_shape_becomes_failure(self):
        assert not llm.complete("sys", [], 10, client=FakeClient(choices=[])).ok

    def test_empty_text_becomes_failure(self):
        assert not llm.complete("sys", [], 10, client=FakeClient("   ")).ok

    def test_no_api_key(self, temp_db):
        result = llm.complete("sys", [], 10)
        assert result.status == "failed"
        assert "API key" in result.reason

    def test_enabled_by_stored_or_env_key(self, temp_db, monkeypatch):
        import db

        assert not llm.is_enabled()
        monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
        assert llm.get_api_key() == "sk-env"
        db.set_api_key("sk-stored")
        assert llm.get_api_key() == "sk-stored"


class TestGenerators:
    def test_smart_prompt_message(self, entries):
        client = FakeClient()
        result = llm.generate_smart_prompt("low", entries, 20, client=client)
        assert result.ok
        call = client.calls[0]
        assert call["max_tokens"] == llm.PROMPT_MAX_TOKENS
        user = call["messages"][1]["content"]
        assert "Current mood: low (Low)" in user
        assert "Time of day: evening" in user
        assert "Recent themes from their journal: work, stress, family" in user

    def test_smart_prompt_for_new_user(self):
        client = FakeClient()
        llm.generate_smart_prompt(None, [], 9, client=client)
        user = client.calls[0]["messages"][1]["content"]
        assert "This is a new user." in user
        assert "Time of day: morning" in user

    def test_weekly_needs_three_entries(self, entries):
        client = FakeClient()
        assert not llm.generate_weekly_insight(entries[:2], client=client).ok
        assert client.calls == []

    def test_weekly_excerpts(self, entries):
        client = FakeClient("Nice week.")
        assert llm.generate_weekly_insight(entries, client=client).text == "Nice week."
        call = client.calls[0]
        assert call["max_tokens"] == llm.WEEKLY_MAX_TOKENS
        assert "[low] Stress about the deadline at work..." in call["messages"][1]["content"]

    def test_personalized_context(self, entries, now):
        client = FakeClient()
        llm.generate_personalized_insight(entries, aggregate(entries, now), client=client)
        call = client.calls[0]
        assert call["max_tokens"] == llm.INSIGHT_MAX_TOKENS
        user = call["messages"][1]["content"]
        assert "Streak: 3 days" in user
        assert "Recent entry moods: Low, Good, Okay" in user


class TestFallbacks:
    """Every remote feature still yields text when the remote call fails."""

    def test_smart_prompt_uses_remote_text(self, entries):
        assert llm.smart_prompt_text("good", entries, 9, client=FakeClient("Remote prompt")) == "Remote prompt"

    def test_smart_prompt_falls_back_to_pools(self, entries):
        text = llm.smart_prompt_text("struggling", entries, 9, client=FakeClient(error=OSError("offline")))
        assert text in PROMPT_POOLS["low_mood"]

    def test_weekly_falls_back_to_template(self, entries, now):
        text = llm.weekly_summary_text(entries, now, client=FakeClient(error=OSError("offline")))
        assert text == summary.compose_weekly_summary(entries, now)

    def test_weekly_with_too_few_entries(self, entries, now):
        assert llm.weekly_summary_text(entries[:1], now, client=FakeClient()).startswith("This week, you wrote 1 entry.")

    def test_personalized_falls_back_to_templates(self, entries, now):
        text = llm.personalized_insight_text(
            entries, aggregate(entries, now), rng=random.Random(0), client=FakeClient(error=OSError("offline"))
        )
        assert text in summary.LOCAL_INSIGHTS

    def test_remote_selector(self, entries):
        select = llm.remote_prompt_selector(entries, client=FakeClient(error=OSError("offline")))
        assert select(20, None) in PROMPT_POOLS["evening"]
        select = llm.remote_prompt_selector(entries, client=FakeClient("From the service"))
        assert select(20, "good") == "From the service"


class TestPromptRefresh:
    """Only the most recent refresh request may replace the displayed prompt."""

    def test_initial_text(self):
        refresh = llm.PromptRefresh("Start here")
        assert refresh.text == "Start here"
        assert not refresh.pending

    def test_resolve_latest(self):
        refresh = llm.PromptRefresh("old")
        token = refresh.begin()
        assert refresh.pending
        assert refresh.resolve(token, llm.RemoteResult.succeeded("new"))
        assert refresh.text == "new"
        assert not refresh.pending

    def test_superseded_response_discarded(self):
        refresh = llm.PromptRefresh("old")
        first = refresh.begin()
        second = refresh.begin()
        assert refresh.resolve(second, llm.RemoteResult.succeeded("second"))
        assert not refresh.resolve(first, llm.RemoteResult.succeeded("first"))
        assert refresh.text == "second"

    def test_cancel_discards_in_flight(self):
        refresh = llm.PromptRefresh("old")
        token = refresh.begin()
        refresh.cancel()
        assert not refresh.resolve(token, llm.RemoteResult.succeeded("late"))
        assert refresh.text == "old"

    def test_failure_uses_fallback(self):
        refresh = llm.PromptRefresh("old")
        token = refresh.begin()
        assert refresh.resolve(token, llm.RemoteResult.failed("offline"), fallback="local prompt")
        assert refresh.text == "local prompt"
        assert refresh.result.status == "failed"

    def test_failure_without_fallback_keeps_text(self):
        refresh = llm.PromptRefresh("old")
        token = refresh.begin()
        refresh.resolve(token, llm.RemoteResult.failed("offline"))
        assert refresh.text == "old"


class TestPromptSelector:
    """The app asks one selector for prompts; remote generation slots in behind it."""

    def test_local_selector_without_key(self, temp_db):
        local = PromptSelector(random.Random(1))
        assert llm.prompt_selector([], local) is local

    def test_remote_selector_with_key(self, temp_db, monkeypatch, entries, now):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
        select = llm.prompt_selector(entries, PromptSelector(random.Random(1)), client=FakeClient("From the service"))
        state = journal.refresh_prompt(journal.initial_state(entries, now), select, 9, "good")
        assert state.current_prompt == "From the service"

    def test_remote_failure_uses_local_pools(self, temp_db, monkeypatch, entries, now):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
        select = llm.prompt_selector(entries, PromptSelector(random.Random(1)), client=FakeClient(error=OSError("offline")))
        state = journal.refresh_prompt(journal.initial_state(entries, now), select, 9, "struggling")
        assert state.current_prompt in PROMPT_POOLS["low_mood"]


class TestClient:
    """Requests are bounded so a slow service cannot hold up writing."""

    @pytest.fixture
    def captured(self, monkeypatch):
        import openai

        seen = {}

        class RecordingOpenAI:
            def __init__(self, **kwargs):
                seen.update(kwargs)

        monkeypatch.setattr(openai, "OpenAI", RecordingOpenAI)
        return seen

    def test_short_timeout_and_no_retries(self, captured, monkeypatch):
        monkeypatch.delenv("REFLECT_REQUEST_TIMEOUT", raising=False)
        llm._client("sk-test")
        assert captured["api_key"] == "sk-test"
        assert captured["timeout"] == config.DEFAULT_REQUEST_TIMEOUT
        assert captured["max_retries"] == 0

    def test_timeout_from_environment(self, captured, monkeypatch):
        monkeypatch.setenv("REFLECT_REQUEST_TIMEOUT", "4.5")
        llm._client("sk-test")
        assert captured["timeout"] == 4.5

    def test_bad_timeout_uses_default(self, monkeypatch):
        monkeypatch.setenv("REFLECT_REQUEST_TIMEOUT", "soon")
        assert config.request_timeout() == config.DEFAULT_REQUEST_TIMEOUT
        monkeypatch.setenv("REFLECT_REQUEST_TIMEOUT", "0")
        assert config.request_timeout() == config.DEFAULT_REQUEST_TIMEOUT
