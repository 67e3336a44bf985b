# Mood scale: five-point self-report, highest first.
MOODS = {
    "amazing": {"emoji": "✨", "label": "Amazing", "value": 5},
    "good": {"emoji": "😊", "label": "Good", "value": 4},
    "okay": {"emoji": "😐", "label": "Okay", "value": 3},
    "low": {"emoji": "😔", "label": "Low", "value": 2},
    "struggling": {"emoji": "😢", "label": "Struggling", "value": 1},
}
MOOD_KEYS = tuple(MOODS)
LOW_MOODS = frozenset(["low", "struggling"])
DEFAULT_MOOD_VALUE = 3


def is_mood(mood) -> bool:
    return mood in MOODS


def mood_value(mood, table: dict | None = None) -> int:
    info = (table or MOODS).get(mood)
    return info["value"] if info else DEFAULT_MOOD_VALUE


def mood_label(mood, table: dict | None = None) -> str:
    info = (table or MOODS).get(mood)
    return info["label"] if info else str(mood)


def mood_emoji(mood, table: dict | None = None) -> str:
    info = (table or MOODS).get(mood)
    return info["emoji"] if info else ""
