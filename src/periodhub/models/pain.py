"""Pain tracker models."""

import uuid
from datetime import date, datetime, time
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from .journal import validate_not_future


class PainType(str, Enum):
    """Character of the pain."""
    CRAMPING = "cramping"
    ACHING = "aching"
    SHARP = "sharp"
    THROBBING = "throbbing"
    BURNING = "burning"
    PRESSURE = "pressure"


class PainLocation(str, Enum):
    """Where the pain is felt."""
    LOWER_ABDOMEN = "lower_abdomen"
    LOWER_BACK = "lower_back"
    UPPER_THIGHS = "upper_thighs"
    PELVIS = "pelvis"
    SIDE = "side"
    WHOLE_ABDOMEN = "whole_abdomen"


class PainSymptom(str, Enum):
    """Symptoms that accompany the pain."""
    NAUSEA = "nausea"
    VOMITING = "vomiting"
    DIARRHEA = "diarrhea"
    HEADACHE = "headache"
    FATIGUE = "fatigue"
    MOOD_CHANGES = "mood_changes"
    BLOATING = "bloating"
    BREAST_TENDERNESS = "breast_tenderness"


class MenstrualStatus(str, Enum):
    """Position in the menstrual cycle when the pain was recorded."""
    BEFORE_PERIOD = "before_period"
    DAY_1 = "day_1"
    DAY_2_3 = "day_2_3"
    DAY_4_PLUS = "day_4_plus"
    AFTER_PERIOD = "after_period"
    MID_CYCLE = "mid_cycle"
    IRREGULAR = "irregular"

    @property
    def display(self) -> str:
        return MENSTRUAL_STATUS_LABELS[self]


MENSTRUAL_STATUS_LABELS = {
    MenstrualStatus.BEFORE_PERIOD: "Before Period",
    MenstrualStatus.DAY_1: "Day 1",
    MenstrualStatus.DAY_2_3: "Days 2-3",
    MenstrualStatus.DAY_4_PLUS: "Day 4+",
    MenstrualStatus.AFTER_PERIOD: "After Period",
    MenstrualStatus.MID_CYCLE: "Mid-Cycle",
    MenstrualStatus.IRREGULAR: "Irregular",
}


class Medication(BaseModel):
    """A medication or remedy taken for the pain."""

    name: str
    dosage: Optional[str] = None
    timing: Optional[str] = None


def _pain_record_id() -> str:
    return f"pain_{uuid.uuid4().hex[:12]}"


class PainRecord(BaseModel):
    """A single pain tracker record, at most one per date."""

    id: str = Field(default_factory=_pain_record_id)
    entry_date: date
    entry_time: time = Field(default_factory=lambda: datetime.now().time().replace(second=0, microsecond=0))
    pain_level: int = Field(ge=0, le=10)
    duration_minutes: Optional[int] = Field(default=None, ge=0)
    pain_types: list[PainType] = Field(default_factory=list)
    locations: list[PainLocation] = Field(default_factory=list)
    symptoms: list[PainSymptom] = Field(default_factory=list)
    menstrual_status: MenstrualStatus = MenstrualStatus.DAY_1
    medications: list[Medication] = Field(default_factory=list)
    effectiveness: Optional[int] = Field(default=None, ge=0, le=10)
    lifestyle_factors: list[str] = Field(default_factory=list)
    notes: Optional[str] = Field(default=None, max_length=500)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @model_validator(mode="after")
    def _not_in_future(self) -> "PainRecord":
        validate_not_future(self.entry_date)
        if self.entry_date == date.today() and self.entry_time > datetime.now().time():
            raise ValueError("Time is in the future")
        return self

    @property
    def recorded_at(self) -> datetime:
        return datetime.combine(self.entry_date, self.entry_time)

    @property
    def pain_range(self) -> str:
        """Bucket used by the distribution chart."""
        if self.pain_level <= 3:
            return "Mild (1-3)"
        if self.pain_level <= 6:
            return "Moderate (4-6)"
        return "Severe (7-10)"
