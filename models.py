# Journal data models: immutable entries and the derived insights snapshot.
from typing import Literal

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from sentiment import THEMES

MoodKey = Literal["amazing", "good", "okay", "low", "struggling"]


class Entry(BaseModel):
    """One journal record: text, self-reported mood and derived tags."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    id: str = Field(..., min_length=1, description="Creation-ordered id")
    content: str = Field(..., description="Entry text, never empty")
    mood: MoodKey = Field(..., description="Self-reported mood")
    sentiment: float | None = Field(default=None, ge=0, le=1, description="Lexicon positivity score")
    themes: tuple[str, ...] = Field(default=(), description="Topic tags from the fixed vocabulary")
    created_at: AwareDatetime = Field(..., description="Creation timestamp")
    prompt: str | None = Field(default=None, description="Prompt that was answered")

    @field_validator("content")
    @classmethod
    def _content_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Entry content must not be empty.")
        return v

    @field_validator("themes", mode="before")
    @classmethod
    def _themes_in_vocabulary(cls, v):
        given = list(v or [])
        unknown = [t for t in given if t not in THEMES]
        if unknown:
            raise ValueError(f"Unknown themes: {', '.join(map(str, unknown))}")
        return tuple(t for t in THEMES if t in given)

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class ThemeCount(BaseModel):
    model_config = ConfigDict(frozen=True)

    theme: str
    count: int


class TrendPoint(BaseModel):
    """One chart point: short date, sentiment percent and mood ordinal."""

    model_config = ConfigDict(frozen=True)

    display_date: str
    sentiment: int
    mood: int


class InsightsSnapshot(BaseModel):
    """Aggregate statistics over the trailing 7 and 30 day windows."""

    model_config = ConfigDict(frozen=True)

    total_entries: int
    entries_this_week: int
    entries_this_month: int
    avg_mood: float
    avg_sentiment: int
    top_themes: tuple[ThemeCount, ...]
    mood_distribution: dict[str, int]
    streak: int
    sentiment_trend: tuple[TrendPoint, ...]
