# OpenAI integration: smart prompts, weekly and personalized insight, all with local fallbacks.
import logging
from typing import Literal

from pydantic import BaseModel, ConfigDict

import config
import db
import moods
import prompts
import summary

logger = logging.getLogger(__name__)

PROMPT_MAX_TOKENS = 150
WEEKLY_MAX_TOKENS = 300
INSIGHT_MAX_TOKENS = 200
MIN_ENTRIES_FOR_REMOTE = 3
WEEKLY_ENTRY_LIMIT = 7
ENTRY_EXCERPT_CHARS = 200

PROMPT_SYSTEM = """You are a compassionate journaling companion. Generate a single thoughtful, empathetic journaling prompt.

Guidelines:
- Be warm and non-judgmental
- Ask open-ended questions that invite deep reflection
- If mood is low or struggling, be extra gentle and supportive
- If mood is good or amazing, help explore what's working
- Keep it to 1-2 sentences max
- Make it feel personal, not generic
- Vary how your questions start

Return ONLY the prompt text, nothing else."""

WEEKLY_SYSTEM = """You are a compassionate journaling companion analyzing someone's journal entries.
Generate a brief, insightful weekly summary that:
- Highlights patterns you notice (emotions, themes, progress)
- Is warm, supportive, and non-judgmental
- Offers one gentle observation or question for reflection
- Is 3-4 sentences max

Reference specific things from their entries rather than giving generic advice."""

INSIGHT_SYSTEM = """You are a thoughtful journaling companion. Based on the user's journal patterns,
provide ONE meaningful insight that could help them on their self-discovery journey.

Be specific to their patterns, warm and encouraging, thought-provoking without being preachy.
Keep it to 2-3 sentences."""


class RemoteResult(BaseModel):
    """Outcome of one remote call: pending, succeeded with text, or failed with a reason."""

    model_config = ConfigDict(frozen=True)

    status: Literal["pending", "succeeded", "failed"]
    text: str | None = None
    reason: str | None = None

    @classmethod
    def pending(cls) -> "RemoteResult":
        return cls(status="pending")

    @classmethod
    def succeeded(cls, text: str) -> "RemoteResult":
        return cls(status="succeeded", text=text)

    @classmethod
    def failed(cls, reason: str) -> "RemoteResult":
        return cls(status="failed", reason=reason)

    @property
    def ok(self) -> bool:
        return self.status == "succeeded"


class PromptRefresh:
    """Holds the displayed prompt; only the newest request may replace it.

    ``begin()`` hands out a token per refresh request. A result resolved with
    an older token is discarded, so a slow response cannot overwrite a newer one.
    """

    def __init__(self, text: str = ""):
        self.text = text
        self.result = RemoteResult.succeeded(text) if text else RemoteResult.pending()
        self._latest = 0

    def begin(self) -> int:
        self._latest += 1
        self.result = RemoteResult.pending()
        return self._latest

    def cancel(self) -> None:
        self._latest += 1

    @property
    def pending(self) -> bool:
        return self.result.status == "pending"

    def resolve(self, token: int, result: RemoteResult, fallback: str | None = None) -> bool:
        if token != self._latest:
            logger.debug("Discarding superseded prompt response %s (latest %s)", token, self._latest)
            return False
        self.result = result
        if result.ok:
            self.text = result.text
        elif fallback is not None:
            self.text = fallback
        return True


def get_api_key() -> str | None:
    return db.get_api_key() or config.env_api_key()


def is_enabled() -> bool:
    return bool(get_api_key())


# Bounded: prompt generation runs inline before the entry editor renders.
def _client(api_key: str):
    from openai import OpenAI
    return OpenAI(api_key=api_key, timeout=config.request_timeout(), max_retries=0)


def _call_openai(client, system: str, messages: list, max_tokens: int) -> str:
    r = client.chat.completions.create(
        model=config.model_name(),
        messages=[{"role": "system", "content": system}, *messages],
        max_tokens=max_tokens,
    )
    text = (r.choices[0].message.content or "").strip()
    if not text:
        raise ValueError("Empty response")
    return text


def complete(system: str, messages: list, max_tokens: int, api_key: str | None = None, client=None) -> RemoteResult:
    """One chat completion. Never raises: every problem becomes a failed result."""
    try:
        if client is None:
            key = api_key or get_api_key()
            if not key:
                return RemoteResult.failed("No API key configured.")
            client = _client(key)
        text = _call_openai(client, system, messages, max_tokens)
    except Exception as e:
        logger.warning("Remote completion failed: %s", e)
        return RemoteResult.failed(str(e) or type(e).__name__)
    return RemoteResult.succeeded(text)


def time_of_day(hour: int) -> str:
    if hour < 12:
        return "morning"
    if hour < 17:
        return "afternoon"
    return "evening"


def recent_themes(entries, limit: int = 3) -> list:
    seen = []
    for e in list(entries)[:3]:
        for t in e.themes:
            if t not in seen:
                seen.append(t)
    return seen[:limit]


def generate_smart_prompt(mood: str | None, entries, hour: int, **kw) -> RemoteResult:
    themes = recent_themes(entries)
    mood_line = f"Current mood: {mood} ({moods.mood_label(mood)})" if mood else "Current mood: not chosen yet"
    theme_line = f"Recent themes from their journal: {', '.join(themes)}" if themes else "This is a new user."
    user = f"{mood_line}\nTime of day: {time_of_day(hour)}\n{theme_line}\n\nGenerate a journaling prompt for this person."
    return complete(PROMPT_SYSTEM, [{"role": "user", "content": user}], PROMPT_MAX_TOKENS, **kw)


def generate_weekly_insight(entries, **kw) -> RemoteResult:
    entries = list(entries)
    if len(entries) < MIN_ENTRIES_FOR_REMOTE:
        return RemoteResult.failed("Not enough entries.")
    excerpts = "\n\n".join(
        f"[{e.mood}] {e.content[:ENTRY_EXCERPT_CHARS]}..." for e in entries[:WEEKLY_ENTRY_LIMIT]
    )
    user = f"Here are my recent journal entries:\n\n{excerpts}\n\nPlease give me a weekly reflection summary."
    return complete(WEEKLY_SYSTEM, [{"role": "user", "content": user}], WEEKLY_MAX_TOKENS, **kw)


def generate_personalized_insight(entries, snapshot, **kw) -> RemoteResult:
    entries = list(entries)
    if len(entries) < MIN_ENTRIES_FOR_REMOTE:
        return RemoteResult.failed("Not enough entries.")
    top = ", ".join(t.theme for t in snapshot.top_themes) if snapshot and snapshot.top_themes else "various"
    context = (
        f"Top themes: {top}\n"
        f"Average mood: {snapshot.avg_mood if snapshot else 'moderate'}/5\n"
        f"Sentiment trend: {snapshot.avg_sentiment if snapshot else 50}% positive\n"
        f"Streak: {snapshot.streak if snapshot else 0} days\n"
        f"Recent entry moods: {', '.join(moods.mood_label(e.mood) for e in entries[:5])}"
    )
    user = f"My journaling patterns:\n{context}\n\nWhat insight do you have for me?"
    return complete(INSIGHT_SYSTEM, [{"role": "user", "content": user}], INSIGHT_MAX_TOKENS, **kw)


# --- Always-available text: remote when it works, local otherwise ---

def smart_prompt_text(mood, entries, hour: int, selector=None, **kw) -> str:
    result = generate_smart_prompt(mood, entries, hour, **kw)
    if result.ok:
        return result.text
    return (selector or prompts.select_prompt)(hour, mood)


def weekly_summary_text(entries, now, **kw) -> str:
    result = generate_weekly_insight(entries, **kw)
    return result.text if result.ok else summary.compose_weekly_summary(entries, now)


def personalized_insight_text(entries, snapshot, rng=None, **kw) -> str:
    result = generate_personalized_insight(entries, snapshot, **kw)
    return result.text if result.ok else summary.local_insight(rng)


def remote_prompt_selector(entries, fallback=None, **kw):
    """A ``(hour, mood) -> str`` selector that asks the remote service first."""
    def select(hour: int, recent_mood: str | None = None) -> str:
        return smart_prompt_text(recent_mood, entries, hour, selector=fallback, **kw)
    return select


def prompt_selector(entries, fallback: prompts.PromptSource, **kw) -> prompts.PromptSource:
    """Remote-backed selector when an API key is available, otherwise ``fallback`` itself."""
    if not is_enabled():
        return fallback
    return remote_prompt_selector(entries, fallback=fallback, **kw)
