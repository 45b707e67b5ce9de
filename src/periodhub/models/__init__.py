"""Data models for PeriodHub."""

from .assessment import (
    AssessmentKind,
    CareAssessment,
    ImpactResult,
    PHQ9Answer,
    PHQ9Result,
    StressResult,
    SymptomAnswers,
    WorkplaceAnswers,
)
from .journal import Flow, Mood, ProgressEntry, SymptomEntry, Technique, validate_not_future
from .pain import (
    Medication,
    MenstrualStatus,
    PainLocation,
    PainRecord,
    PainSymptom,
    PainType,
)

__all__ = [
    "SymptomEntry",
    "ProgressEntry",
    "Mood",
    "Flow",
    "Technique",
    "validate_not_future",
    "PainRecord",
    "PainType",
    "PainLocation",
    "PainSymptom",
    "MenstrualStatus",
    "Medication",
    "AssessmentKind",
    "PHQ9Answer",
    "PHQ9Result",
    "StressResult",
    "SymptomAnswers",
    "WorkplaceAnswers",
    "ImpactResult",
    "CareAssessment",
]
