# Windowed statistics, writing streak and calendar data. Pure functions of (entries, now).
import math
from datetime import date, datetime, timedelta

import moods
import sentiment
from models import InsightsSnapshot, ThemeCount, TrendPoint

WEEK_DAYS = 7
MONTH_DAYS = 30
TREND_POINTS = 14
TOP_THEMES = 5
MIN_ENTRIES_FOR_INSIGHTS = 2
CALENDAR_DAYS = 28
# Gap between successive writing days that still continues a streak.
STREAK_GAP = timedelta(days=1.5)
TIME_BUCKETS = ("morning", "afternoon", "evening", "night")


def round_half_up(x: float, ndigits: int = 0) -> float:
    q = 10 ** ndigits
    return math.floor(x * q + 0.5) / q


def to_percent(x: float) -> int:
    return int(round_half_up(x * 100))


def entry_sentiment(entry) -> float:
    return sentiment.NEUTRAL_SENTIMENT if entry.sentiment is None else entry.sentiment


def local_time(ts: datetime, now: datetime) -> datetime:
    return ts.astimezone(now.tzinfo)


def local_day(ts: datetime, now: datetime) -> date:
    return local_time(ts, now).date()


def within_days(entries, now: datetime, days: int) -> list:
    if now.tzinfo is None:
        raise ValueError("now must be timezone-aware")
    cutoff = now - timedelta(days=days)
    return [e for e in entries if e.created_at >= cutoff]


def calculate_streak(entries, now: datetime) -> int:
    """Consecutive writing days ending today or yesterday."""
    days = sorted({local_day(e.created_at, now) for e in entries}, reverse=True)
    if not days:
        return 0
    today = now.date()
    if days[0] not in (today, today - timedelta(days=1)):
        return 0
    streak = 1
    for newer, older in zip(days, days[1:]):
        if newer - older > STREAK_GAP:
            break
        streak += 1
    return streak


def _display_date(ts: datetime, now: datetime) -> str:
    local = local_time(ts, now)
    return f"{local.strftime('%b')} {local.day}"


def sentiment_trend(last30, now: datetime, points: int = TREND_POINTS) -> tuple:
    recent = sorted(last30, key=lambda e: e.created_at, reverse=True)[:points]
    return tuple(
        TrendPoint(
            display_date=_display_date(e.created_at, now),
            sentiment=to_percent(entry_sentiment(e)),
            mood=moods.mood_value(e.mood),
        )
        for e in reversed(recent)
    )


def mood_distribution(entries) -> dict:
    counts = {}
    for e in entries:
        counts[e.mood] = counts.get(e.mood, 0) + 1
    return counts


def aggregate(entries, now: datetime) -> InsightsSnapshot | None:
    """Insights over the trailing windows, or None with fewer than two entries."""
    entries = list(entries)
    if len(entries) < MIN_ENTRIES_FOR_INSIGHTS:
        return None
    last7 = within_days(entries, now, WEEK_DAYS)
    last30 = within_days(entries, now, MONTH_DAYS)

    if last7:
        avg_mood = round_half_up(sum(moods.mood_value(e.mood) for e in last7) / len(last7), 1)
        avg_sent = sum(entry_sentiment(e) for e in last7) / len(last7)
    else:
        avg_mood, avg_sent = 0.0, sentiment.NEUTRAL_SENTIMENT

    top = sentiment.aggregate_themes(last30)[:TOP_THEMES]
    return InsightsSnapshot(
        total_entries=len(entries),
        entries_this_week=len(last7),
        entries_this_month=len(last30),
        avg_mood=avg_mood,
        avg_sentiment=to_percent(avg_sent),
        top_themes=tuple(ThemeCount(**t) for t in top),
        mood_distribution=mood_distribution(last30),
        streak=calculate_streak(entries, now),
        sentiment_trend=sentiment_trend(last30, now),
    )


def calendar_days(entries, now: datetime, days: int = CALENDAR_DAYS) -> list:
    by_day = {}
    for e in entries:
        by_day.setdefault(local_day(e.created_at, now), []).append(e)
    today = now.date()
    out = []
    for offset in range(days - 1, -1, -1):
        d = today - timedelta(days=offset)
        day_entries = by_day.get(d, [])
        out.append({
            "date": d,
            "has_entry": bool(day_entries),
            "mood": day_entries[0].mood if day_entries else None,
            "count": len(day_entries),
        })
    return out


def _time_bucket(hour: int) -> str:
    if 5 <= hour < 12:
        return "morning"
    if 12 <= hour < 17:
        return "afternoon"
    if 17 <= hour < 21:
        return "evening"
    return "night"


def writing_time_pattern(entries, now: datetime) -> str | None:
    counts = {b: 0 for b in TIME_BUCKETS}
    for e in entries:
        counts[_time_bucket(local_time(e.created_at, now).hour)] += 1
    best = None
    for bucket in TIME_BUCKETS:
        if counts[bucket] > 0 and (best is None or counts[bucket] > counts[best]):
            best = bucket
    return best
