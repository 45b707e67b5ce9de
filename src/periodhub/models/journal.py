"""Journal entry models: daily symptom log and stress-management progress."""

import time
import uuid
from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


def validate_not_future(value: date, today: Optional[date] = None) -> date:
    """Reject dates after today."""
    today = today or date.today()
    if value > today:
        raise ValueError(f"Date {value.isoformat()} is in the future")
    return value


class Mood(str, Enum):
    """Self-reported mood for the day."""
    VERY_LOW = "very_low"
    LOW = "low"
    NEUTRAL = "neutral"
    GOOD = "good"
    VERY_GOOD = "very_good"

    @property
    def display(self) -> str:
        return self.value.replace("_", " ").title()


class Flow(str, Enum):
    """Menstrual flow intensity."""
    NONE = "none"
    SPOTTING = "spotting"
    LIGHT = "light"
    MEDIUM = "medium"
    HEAVY = "heavy"


class Technique(str, Enum):
    """Stress-relief techniques tracked in progress entries."""
    BREATHING = "breathing"
    MEDITATION = "meditation"
    EXERCISE = "exercise"
    YOGA = "yoga"
    MUSIC = "music"
    NATURE = "nature"
    JOURNALING = "journaling"
    SOCIAL = "social"

    def label(self, locale: str = "en") -> str:
        return TECHNIQUE_LABELS[self][0 if locale == "en" else 1]


TECHNIQUE_LABELS = {
    Technique.BREATHING: ("Breathing Exercises", "呼吸练习"),
    Technique.MEDITATION: ("Meditation", "冥想"),
    Technique.EXERCISE: ("Exercise", "运动"),
    Technique.YOGA: ("Yoga", "瑜伽"),
    Technique.MUSIC: ("Music Therapy", "音乐疗法"),
    Technique.NATURE: ("Time in Nature", "亲近自然"),
    Technique.JOURNALING: ("Journaling", "写日记"),
    Technique.SOCIAL: ("Social Support", "社交支持"),
}


def _symptom_entry_id() -> str:
    return f"sym_{uuid.uuid4().hex[:12]}"


def _progress_entry_id() -> str:
    return f"entry_{int(time.time() * 1000)}_{uuid.uuid4().hex[:9]}"


class SymptomEntry(BaseModel):
    """A daily symptom journal entry."""

    id: str = Field(default_factory=_symptom_entry_id)
    entry_date: date
    pain_level: int = Field(ge=0, le=10)
    symptoms: list[str] = Field(default_factory=list)
    mood: Mood = Mood.NEUTRAL
    flow: Flow = Flow.NONE
    medications: list[str] = Field(default_factory=list)
    notes: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.now)

    @field_validator("entry_date")
    @classmethod
    def _not_in_future(cls, value: date) -> date:
        return validate_not_future(value)

    @field_validator("symptoms", "medications")
    @classmethod
    def _strip_blanks(cls, values: list[str]) -> list[str]:
        return [v.strip() for v in values if v and v.strip()]

    @property
    def has_medications(self) -> bool:
        return len(self.medications) > 0


class ProgressEntry(BaseModel):
    """A stress-management progress log entry."""

    id: str = Field(default_factory=_progress_entry_id)
    entry_date: date
    stress_level: int = Field(ge=1, le=10)
    techniques: list[Technique] = Field(default_factory=list)
    mood_rating: int = Field(ge=1, le=10)
    notes: Optional[str] = None
    timestamp: float = Field(default_factory=lambda: time.time() * 1000)

    @field_validator("entry_date")
    @classmethod
    def _not_in_future(cls, value: date) -> date:
        return validate_not_future(value)

    @property
    def stress_color(self) -> str:
        """Badge color class for the stress level."""
        if self.stress_level >= 8:
            return "red"
        if self.stress_level >= 5:
            return "yellow"
        return "green"

    @property
    def mood_color(self) -> str:
        if self.mood_rating >= 8:
            return "green"
        if self.mood_rating >= 5:
            return "yellow"
        return "red"
