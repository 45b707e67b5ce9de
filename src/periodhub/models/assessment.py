"""Questionnaire inputs and result models."""

from datetime import datetime
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, Field


class AssessmentKind(str, Enum):
    """Kinds of stored assessment results."""
    PHQ9 = "phq9"
    STRESS = "stress"
    SYMPTOM = "symptom"
    CARE = "care"


# PHQ-9

class PHQ9Answer(BaseModel):
    question_id: int
    score: int


class PHQ9Result(BaseModel):
    """Outcome of a PHQ-9 screening."""

    total_score: int
    severity: str
    severity_label: str
    risk_level: str
    requires_professional_help: bool
    has_thoughts_of_self_harm: bool
    recommendations: list[str] = Field(default_factory=list)
    answers: list[PHQ9Answer] = Field(default_factory=list)
    completed_at: datetime = Field(default_factory=datetime.now)


# Stress

class StressResult(BaseModel):
    """Outcome of the stress assessment."""

    score: int
    level: str
    primary_pain_point: str
    radar: dict[str, int]
    recommendations: list[str] = Field(default_factory=list)
    action_steps: list[dict[str, str]] = Field(default_factory=list)
    completed_at: datetime = Field(default_factory=datetime.now)


# Symptom impact

PainLevelOption = Literal["mild", "moderate", "severe", "very_severe"]
DurationOption = Literal["short", "medium", "long", "variable"]
ReliefOption = Literal["instant", "natural", "long_term", "medical"]
FunctionalImpactOption = Literal["minimal", "moderate", "significant", "severe"]
CyclePatternOption = Literal["regular", "irregular", "heavy", "light"]
PainPatternOption = Literal["cramping", "constant", "sharp", "throbbing"]
PainTimingOption = Literal["before_period", "first_day", "during_period", "after_period"]


class SymptomAnswers(BaseModel):
    """Answers to the symptom assessment questionnaire (simple or detailed)."""

    pain_level: PainLevelOption
    pain_duration: DurationOption
    # Asked by the simple questionnaire only
    relief_preference: Optional[ReliefOption] = None
    accompanying_symptoms: list[str] = Field(default_factory=list)
    pain_location: list[str] = Field(default_factory=list)

    # Detailed questionnaire only
    cycle_pattern: Optional[CyclePatternOption] = None
    pain_pattern: Optional[PainPatternOption] = None
    pain_timing: Optional[PainTimingOption] = None
    medical_history: list[str] = Field(default_factory=list)
    lifestyle_factors: list[str] = Field(default_factory=list)
    functional_impact: Optional[FunctionalImpactOption] = None


class WorkplaceAnswers(BaseModel):
    concentration: Literal["none", "slight", "difficult", "impossible"]
    absenteeism: Literal["never", "rarely", "sometimes", "frequently"]
    communication: Literal["comfortable", "hesitant", "uncomfortable", "na"]


class RecommendationBuckets(BaseModel):
    immediate: list[str] = Field(default_factory=list)
    long_term: list[str] = Field(default_factory=list)


class ImpactResult(BaseModel):
    """Scored symptom assessment with recommendations."""

    score: int
    is_severe: bool = False
    summary: list[str] = Field(default_factory=list)
    recommendations: RecommendationBuckets = Field(default_factory=RecommendationBuckets)
    profile: Optional[str] = None
    suggestions: list[str] = Field(default_factory=list)


# Medical care guide

class PainAssessment(BaseModel):
    pain_level: int
    severity: str
    should_see_doctor: bool
    urgency: str
    recommendations: list[str] = Field(default_factory=list)


class SymptomRiskAnalysis(BaseModel):
    risk_level: str
    risk_score: int
    selected: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    general_advice: list[str] = Field(default_factory=list)


class CareAssessment(BaseModel):
    """Combined pain-scale and red-flag assessment."""

    pain: PainAssessment
    symptoms: SymptomRiskAnalysis
    final_risk: str
    urgency: str
    title: str
    priority: str
    completed_at: datetime = Field(default_factory=datetime.now)


class StoredAssessment(BaseModel):
    """An assessment result as persisted in the journal."""

    kind: AssessmentKind
    result: dict
    saved_at: datetime = Field(default_factory=datetime.now)
