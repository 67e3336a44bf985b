# Templated weekly recap and local insight text.
import random
from datetime import datetime

import insights
import moods
import sentiment

EMPTY_WEEK_TEXT = "Start journaling to see your weekly insights here!"
POSITIVE_TONE_TEXT = "Your writing carried a notably positive tone, it seems like things are going well!"
CHALLENGING_TONE_TEXT = (
    "Your entries suggest you've been processing some challenges. Remember, it's okay to not be okay."
)

LOCAL_INSIGHTS = [
    "Each entry you write is a step toward deeper self-understanding. Look for patterns in when you feel most at peace.",
    "Your journal captures your evolving relationship with yourself. What themes have surprised you?",
    "Consistency in reflection builds self-awareness. Notice how your writing practice is affecting your daily mindset.",
]


def dominant_mood(mood_list: list):
    """Most frequent mood; among equally frequent moods the last one listed wins."""
    if not mood_list:
        return None
    return sorted(mood_list, key=mood_list.count)[-1]


def compose_weekly_summary(entries, now: datetime) -> str:
    week = insights.within_days(entries, now, insights.WEEK_DAYS)
    if not week:
        return EMPTY_WEEK_TEXT

    n = len(week)
    parts = [f"This week, you wrote {n} {'entry' if n == 1 else 'entries'}."]

    themes = sentiment.aggregate_themes(week)
    if themes:
        parts.append(f'"{themes[0]["theme"].capitalize()}" was a recurring theme in your reflections.')

    avg = sum(insights.entry_sentiment(e) for e in week) / n
    if avg > sentiment.POSITIVE_THRESHOLD:
        parts.append(POSITIVE_TONE_TEXT)
    elif avg < sentiment.NEGATIVE_THRESHOLD:
        parts.append(CHALLENGING_TONE_TEXT)

    mood = dominant_mood([e.mood for e in week])
    if mood:
        parts.append(f'You most often felt "{moods.mood_label(mood)}" this week.')
    return " ".join(parts)


def local_insight(rng: random.Random | None = None, templates: list | None = None) -> str:
    return (rng or random).choice(templates or LOCAL_INSIGHTS)
