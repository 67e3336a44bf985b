# Journal state: immutable snapshot, update functions that recompute insights, history, export/import.
import json
import logging
from datetime import datetime, timedelta

from pydantic import BaseModel, ConfigDict, ValidationError

import insights
import moods
import sentiment
from models import Entry, InsightsSnapshot
from prompts import PromptSource

logger = logging.getLogger(__name__)

ENTRY_ID_PREFIX = "entry_"


class JournalState(BaseModel):
    """Entries newest first, their insights, and the prompt on display."""

    model_config = ConfigDict(frozen=True)

    entries: tuple[Entry, ...] = ()
    insights: InsightsSnapshot | None = None
    current_prompt: str = ""


def _id_seq(eid: str) -> int | None:
    tail = eid[len(ENTRY_ID_PREFIX):] if eid.startswith(ENTRY_ID_PREFIX) else ""
    return int(tail) if tail.isdigit() else None


def next_entry_id(entries, now: datetime) -> str:
    """Millisecond id, bumped past every existing one so ids keep increasing."""
    n = int(now.timestamp() * 1000)
    seqs = [s for s in (_id_seq(e.id) for e in entries) if s is not None]
    if seqs:
        n = max(n, max(seqs) + 1)
    return f"{ENTRY_ID_PREFIX}{n}"


def create_entry(content: str, mood: str, now: datetime, prompt: str | None = None, entries=()) -> Entry:
    text = (content or "").strip()
    if not text:
        raise ValueError("Write something before saving.")
    if not moods.is_mood(mood):
        raise ValueError(f"Unknown mood: {mood!r}")
    return Entry(
        id=next_entry_id(entries, now),
        content=text,
        mood=mood,
        sentiment=sentiment.score_sentiment(text),
        themes=sentiment.extract_themes(text),
        created_at=now,
        prompt=prompt or None,
    )


def initial_state(entries, now: datetime, prompt: str = "") -> JournalState:
    entries = tuple(entries)
    return JournalState(entries=entries, insights=insights.aggregate(entries, now), current_prompt=prompt)


def replace_entries(state: JournalState, entries, now: datetime) -> JournalState:
    entries = tuple(entries)
    return state.model_copy(update={"entries": entries, "insights": insights.aggregate(entries, now)})


def add_entry(state: JournalState, content: str, mood: str, now: datetime, prompt: str | None = None) -> JournalState:
    entry = create_entry(content, mood, now, prompt=prompt, entries=state.entries)
    return replace_entries(state, (entry,) + state.entries, now)


def delete_entry(state: JournalState, entry_id: str, now: datetime) -> JournalState:
    return replace_entries(state, tuple(e for e in state.entries if e.id != entry_id), now)


def with_prompt(state: JournalState, prompt: str) -> JournalState:
    return state.model_copy(update={"current_prompt": prompt})


def refresh_prompt(state: JournalState, selector: PromptSource, hour: int, recent_mood: str | None = None) -> JournalState:
    """Ask ``selector`` (any ``(hour, mood) -> str``) for a new prompt."""
    return with_prompt(state, selector(hour, recent_mood))


def get_entry(state: JournalState, entry_id: str) -> Entry | None:
    return next((e for e in state.entries if e.id == entry_id), None)


# --- History ---

def filter_entries(entries, query: str = "", mood: str | None = None) -> list:
    q = (query or "").strip().lower()
    return [
        e for e in entries
        if (not q or q in e.content.lower()) and (not mood or e.mood == mood)
    ]


def group_label(entry: Entry, now: datetime) -> str:
    today = now.date()
    day = insights.local_day(entry.created_at, now)
    week_start = today - timedelta(days=(today.weekday() + 1) % 7)
    if day == today:
        return "Today"
    if day == today - timedelta(days=1):
        return "Yesterday"
    if week_start <= day < week_start + timedelta(days=7):
        return "This Week"
    if (day.year, day.month) == (today.year, today.month):
        return "This Month"
    return insights.local_time(entry.created_at, now).strftime("%B %Y")


def group_entries(entries, now: datetime) -> dict:
    groups = {}
    for e in entries:
        groups.setdefault(group_label(e, now), []).append(e)
    return groups


# --- Export / import ---

def export_entries(entries) -> str:
    return json.dumps([e.to_dict() for e in entries], indent=2, ensure_ascii=False)


def _entry_from_import(item: dict, known: list, now: datetime) -> Entry | None:
    content = (item.get("content") or "").strip() if isinstance(item.get("content"), str) else ""
    if not content:
        return None
    data = dict(item)
    if data.get("sentiment") is None:
        data["sentiment"] = sentiment.score_sentiment(content)
    if "themes" not in data:
        data["themes"] = sentiment.extract_themes(content)
    if not isinstance(data.get("id"), str) or not data["id"]:
        data["id"] = next_entry_id(known, now)
    if "createdAt" not in data and "created_at" not in data:
        data["createdAt"] = now.isoformat()
    try:
        return Entry.model_validate(data)
    except ValidationError as e:
        logger.warning("Skipping invalid imported entry: %s", e)
        return None


def import_entries(state: JournalState, text: str, now: datetime) -> tuple:
    """Add exported records not already present; returns (new_state, imported_count)."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Not a valid export file: {e}") from e
    if not isinstance(data, list):
        raise ValueError("Export file must contain a list of entries.")

    merged = list(state.entries)
    ids = {e.id for e in merged}
    imported = 0
    for item in data:
        if not isinstance(item, dict):
            continue
        if isinstance(item.get("id"), str) and item["id"] in ids:
            continue
        entry = _entry_from_import(item, merged, now)
        if entry is None or entry.id in ids:
            continue
        merged.append(entry)
        ids.add(entry.id)
        imported += 1
    merged.sort(key=lambda e: e.created_at, reverse=True)
    return replace_entries(state, merged, now), imported
