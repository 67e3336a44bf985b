# Reflective prompt pools and the local prompt decision table.
import random
from typing import Callable

import moods

PROMPT_POOLS = {
    "morning": [
        "What's one thing you're looking forward to today?",
        "How did you sleep, and how is your body feeling this morning?",
        "What intention would you like to set for today?",
        "If today had a color, what would it be and why?",
    ],
    "evening": [
        "What moment from today are you most grateful for?",
        "What challenged you today, and how did you handle it?",
        "What did you learn about yourself today?",
        "If you could relive one moment from today, which would it be?",
    ],
    "low_mood": [
        "What's weighing on your mind right now? Let it all out.",
        "What's one small act of kindness you could show yourself today?",
        "When did you last feel at peace? Describe that moment.",
        "What would you tell a friend who was feeling this way?",
    ],
    "general": [
        "What's been taking up most of your mental space lately?",
        "Describe a recent moment that made you smile.",
        "What's something you've been avoiding that deserves attention?",
        "How have your relationships been feeling lately?",
        "What does your ideal tomorrow look like?",
    ],
}

FOLLOW_UP_TEMPLATES = [
    "You mentioned {theme} recently. How has that been evolving?",
    "Last time you wrote about feeling {mood}. How are things now?",
    "I noticed {theme} comes up often. Would you like to explore that more?",
]

MORNING_END_HOUR = 12
EVENING_START_HOUR = 18

# Anything with this shape can stand in for the local selector.
PromptSource = Callable[[int, "str | None"], str]


def pool_name(hour: int, recent_mood: str | None = None) -> str:
    if recent_mood in moods.LOW_MOODS:
        return "low_mood"
    if hour < MORNING_END_HOUR:
        return "morning"
    if hour >= EVENING_START_HOUR:
        return "evening"
    return "general"


def select_prompt(hour: int, recent_mood: str | None = None, rng=None, pools: dict | None = None) -> str:
    pool = (pools or PROMPT_POOLS)[pool_name(hour, recent_mood)]
    return (rng or random).choice(pool)


class PromptSelector:
    """Uniform random pick from the pool matching mood and hour.

    Picks are with replacement, so regenerating can return the same prompt.
    Pass a seeded ``random.Random`` for reproducible selection.
    """

    def __init__(self, rng: random.Random | None = None, pools: dict | None = None):
        self.rng = rng or random.SystemRandom()
        self.pools = pools or PROMPT_POOLS

    def select(self, hour: int, recent_mood: str | None = None) -> str:
        return select_prompt(hour, recent_mood, rng=self.rng, pools=self.pools)

    def regenerate(self, hour: int, recent_mood: str | None = None) -> str:
        return self.select(hour, recent_mood)

    __call__ = select


def follow_up_prompt(entries, rng=None, templates: list | None = None) -> str | None:
    """Template prompt referring back to the most recent entry, if it has themes."""
    entries = list(entries)
    if not entries:
        return None
    latest = entries[0]
    theme = next((t for e in entries[:3] for t in e.themes), None)
    if theme is None:
        return None
    template = (rng or random).choice(templates or FOLLOW_UP_TEMPLATES)
    return template.format(theme=theme, mood=moods.mood_label(latest.mood).lower())
