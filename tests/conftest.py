"""Shared fixtures: a fixed clock, an entry factory and a throwaway database."""

from datetime import datetime, timedelta, timezone
from itertools import count

import pytest

import sentiment
from models import Entry

# Monday afternoon, UTC.
NOW = datetime(2026, 10, 19, 15, 0, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def make_entry():
    """Build an Entry relative to NOW; sentiment and themes default to the real scorers."""
    ids = count(1)

    def make(
        content: str = "Just an ordinary day.",
        mood: str = "okay",
        days_ago: float = 0,
        hours_ago: float = 0,
        sentiment_score: float | None = None,
        themes=None,
        prompt: str | None = None,
    ) -> Entry:
        return Entry(
            id=f"entry_{next(ids)}",
            content=content,
            mood=mood,
            sentiment=sentiment.score_sentiment(content) if sentiment_score is None else sentiment_score,
            themes=sentiment.extract_themes(content) if themes is None else themes,
            created_at=NOW - timedelta(days=days_ago, hours=hours_ago),
            prompt=prompt,
        )

    return make


@pytest.fixture
def temp_db(monkeypatch, tmp_path):
    """Point the store at a fresh SQLite file and hide any real API key."""
    path = tmp_path / "journal.db"
    monkeypatch.setenv("REFLECT_DB_PATH", str(path))
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    return path
