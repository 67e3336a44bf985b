# Lexicon sentiment and keyword theme extraction for journal entries.
import re

POSITIVE_WORDS = (
    "happy", "grateful", "excited", "love", "amazing", "wonderful", "great", "joy",
    "peaceful", "calm", "blessed", "thankful", "proud", "accomplished", "hopeful", "inspired",
)
NEGATIVE_WORDS = (
    "sad", "angry", "frustrated", "anxious", "worried", "stressed", "tired", "exhausted",
    "overwhelmed", "lonely", "scared", "disappointed", "hurt", "confused", "lost",
)

NEUTRAL_SENTIMENT = 0.5
POSITIVE_THRESHOLD = 0.6
NEGATIVE_THRESHOLD = 0.4

THEME_KEYWORDS = {
    "work": ["work", "job", "office", "meeting", "project", "deadline", "boss", "colleague", "career"],
    "family": ["family", "mom", "dad", "parent", "sibling", "brother", "sister", "child", "kid"],
    "health": ["health", "exercise", "workout", "sleep", "tired", "energy", "sick", "doctor"],
    "relationships": ["friend", "relationship", "partner", "dating", "love", "connection"],
    "growth": ["learn", "grow", "improve", "goal", "achieve", "progress", "develop"],
    "stress": ["stress", "anxiety", "worry", "pressure", "overwhelm", "busy"],
    "creativity": ["create", "creative", "art", "write", "music", "idea", "inspire"],
    "nature": ["nature", "outside", "walk", "park", "sun", "weather", "fresh air"],
}
THEMES = tuple(THEME_KEYWORDS)


def compile_theme_patterns(keywords: dict) -> dict:
    return {
        theme: re.compile(r"\b(?:" + "|".join(re.escape(w) for w in words) + r")\b", re.IGNORECASE)
        for theme, words in keywords.items()
    }


THEME_PATTERNS = compile_theme_patterns(THEME_KEYWORDS)


def score_sentiment(text: str, positive=POSITIVE_WORDS, negative=NEGATIVE_WORDS) -> float:
    """Share of affect-bearing tokens that are positive, 0.5 when none match.

    A token counts when it contains a lexicon word, so "calmer" matches
    "calm" and "unhappy" still counts as positive.
    """
    pos = neg = 0
    for token in (text or "").lower().split():
        if any(w in token for w in positive):
            pos += 1
        if any(w in token for w in negative):
            neg += 1
    total = pos + neg
    if total == 0:
        return NEUTRAL_SENTIMENT
    return pos / total


def sentiment_label(score: float | None) -> str:
    if score is None:
        return "neutral"
    if score > POSITIVE_THRESHOLD:
        return "positive"
    if score < NEGATIVE_THRESHOLD:
        return "negative"
    return "neutral"


def extract_themes(text: str, patterns: dict | None = None) -> set:
    if not (text or "").strip():
        return set()
    patterns = THEME_PATTERNS if patterns is None else patterns
    return {theme for theme, pattern in patterns.items() if pattern.search(text)}


# Counts in first-seen order; the stable sort keeps that order among ties.
def aggregate_themes(entries) -> list:
    counts = {}
    for e in entries:
        for t in (e.themes or ()):
            counts[t] = counts.get(t, 0) + 1
    return sorted([{"theme": k, "count": v} for k, v in counts.items()], key=lambda x: -x["count"])
