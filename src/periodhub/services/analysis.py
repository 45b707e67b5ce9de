"""Analysis service for pain records, symptom entries and stress progress."""

import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Optional

import pandas as pd
from scipy import stats

from ..models.journal import ProgressEntry, SymptomEntry
from ..models.pain import MenstrualStatus, PainRecord
from ..services.storage import JournalStorage
from ..utils.numbers import clamp, round_half_up

logger = logging.getLogger(__name__)

SUCCESS_THRESHOLD = 7
TREND_THRESHOLD = 0.1
MIN_TREND_POINTS = 5
MIN_PREDICTION_RECORDS = 10
MIN_CORRELATION_SAMPLES = 5

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


@dataclass
class CorrelationResult:
    """Result of a correlation analysis."""
    factor: str
    correlation: float
    p_value: float
    n_samples: int
    interpretation: str

    @property
    def is_significant(self) -> bool:
        return self.p_value < 0.05

    @property
    def strength(self) -> str:
        r = abs(self.correlation)
        if r < 0.1:
            return "negligible"
        elif r < 0.3:
            return "weak"
        elif r < 0.5:
            return "moderate"
        elif r < 0.7:
            return "strong"
        else:
            return "very strong"

    @property
    def direction(self) -> str:
        if self.correlation > 0:
            return "positive"
        elif self.correlation < 0:
            return "negative"
        return "none"


@dataclass
class TreatmentEffectiveness:
    treatment: str
    average_effectiveness: float
    usage_count: int
    success_rate: float  # % of uses rated 7 or higher


@dataclass
class CyclePattern:
    phase: MenstrualStatus
    average_pain_level: float
    common_symptoms: list[str]
    frequency: int


@dataclass
class PainPattern:
    """Pattern detected in pain records."""
    pattern_type: str  # 'menstrual_cycle', 'treatment_response', 'seasonal', 'trigger_identification'
    description: str
    confidence: float
    recommendations: list[str] = field(default_factory=list)


@dataclass
class PainAnalytics:
    total_records: int = 0
    average_pain_level: float = 0.0
    common_pain_types: list[dict] = field(default_factory=list)
    common_locations: list[dict] = field(default_factory=list)
    effective_treatments: list[TreatmentEffectiveness] = field(default_factory=list)
    cycle_patterns: list[CyclePattern] = field(default_factory=list)
    trend_data: list[dict] = field(default_factory=list)
    trend_slope: float = 0.0
    trend: str = "stable"
    pain_distribution: dict[str, int] = field(default_factory=dict)
    insights: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return self.total_records == 0


@dataclass
class ProgressStatistics:
    total_entries: int = 0
    average_stress_level: float = 0.0
    average_mood_rating: float = 0.0
    techniques_used_rate: float = 0.0
    most_used_techniques: list[dict] = field(default_factory=list)
    improvement_trend: float = 0.0  # positive means stress went down


def _frequency(counter: Counter, key_name: str) -> list[dict]:
    """Counts as percentages of all mentions, most common first."""
    total = sum(counter.values())
    if total == 0:
        return []
    return [
        {key_name: key, "count": count, "percentage": round_half_up(count / total * 100, 1)}
        for key, count in counter.most_common()
    ]


def trend_slope(levels: list[float]) -> float:
    """Least-squares slope of pain levels against their sequence index."""
    if len(levels) < 2:
        return 0.0
    result = stats.linregress(range(len(levels)), levels)
    slope = float(result.slope)
    return 0.0 if pd.isna(slope) else slope


def classify_trend(levels: list[float]) -> str:
    if len(levels) < MIN_TREND_POINTS:
        return "stable"
    slope = trend_slope(levels)
    if slope < -TREND_THRESHOLD:
        return "improving"
    if slope > TREND_THRESHOLD:
        return "worsening"
    return "stable"


class AnalysisService:
    """
    Service for analyzing journal data.

    Works on records passed in directly, or loads them from storage when
    none are given. Every method returns empty results rather than failing
    when there is not enough data.
    """

    def __init__(self, storage: Optional[JournalStorage] = None):
        self.storage = storage or JournalStorage()

    def _pain_records(self, records: Optional[list[PainRecord]]) -> list[PainRecord]:
        if records is not None:
            return records
        with self.storage as storage:
            return storage.list_pain_records()

    def build_dataframe(self, records: Optional[list[PainRecord]] = None) -> pd.DataFrame:
        """
        Build a DataFrame from pain records for analysis.

        Each row is a record, sorted by date and time.
        """
        records = self._pain_records(records)
        if not records:
            return pd.DataFrame()

        rows = [self._record_to_row(r) for r in records]
        df = pd.DataFrame(rows)
        df["date"] = pd.to_datetime(df["date"])
        return df.sort_values(["date", "time"]).reset_index(drop=True)

    def _record_to_row(self, record: PainRecord) -> dict:
        return {
            "id": record.id,
            "date": record.entry_date,
            "time": record.entry_time.strftime("%H:%M"),
            "month": record.entry_date.month,
            "pain_level": record.pain_level,
            "effectiveness": record.effectiveness,
            "menstrual_status": record.menstrual_status.value,
            "symptom_count": len(record.symptoms),
            "medication_count": len(record.medications),
            "pain_range": record.pain_range,
        }

    # Pain analytics

    def pain_analytics(self, records: Optional[list[PainRecord]] = None) -> PainAnalytics:
        """Aggregate statistics and insights for pain records."""
        records = self._pain_records(records)
        df = self.build_dataframe(records)
        if df.empty:
            return PainAnalytics(insights=self.generate_insights(PainAnalytics()))

        ordered = sorted(records, key=lambda r: r.recorded_at)
        levels = df["pain_level"].astype(float).tolist()

        analytics = PainAnalytics(
            total_records=len(df),
            average_pain_level=round_half_up(float(df["pain_level"].mean()), 1),
            common_pain_types=_frequency(Counter(t.value for r in records for t in r.pain_types), "type"),
            common_locations=_frequency(Counter(loc.value for r in records for loc in r.locations), "location"),
            effective_treatments=self.treatment_effectiveness(records),
            cycle_patterns=self.cycle_patterns(records),
            trend_data=[
                {"date": r.entry_date.isoformat(), "pain_level": r.pain_level}
                for r in ordered
            ],
            trend_slope=round(trend_slope(levels), 3),
            trend=classify_trend(levels),
            pain_distribution={
                label: int((df["pain_range"] == label).sum())
                for label in ("Mild (1-3)", "Moderate (4-6)", "Severe (7-10)")
            },
        )
        analytics.insights = self.generate_insights(analytics)
        return analytics

    def treatment_effectiveness(self, records: list[PainRecord]) -> list[TreatmentEffectiveness]:
        """Per-medication effectiveness for medications used at least twice."""
        usage: dict[str, list[int]] = {}
        for record in records:
            for medication in record.medications:
                usage.setdefault(medication.name.strip().lower(), []).append(record.effectiveness or 0)

        results = []
        for name, ratings in usage.items():
            if len(ratings) < 2:
                continue
            successes = sum(1 for r in ratings if r >= SUCCESS_THRESHOLD)
            results.append(TreatmentEffectiveness(
                treatment=name[:1].upper() + name[1:],
                average_effectiveness=round_half_up(sum(ratings) / len(ratings), 1),
                usage_count=len(ratings),
                success_rate=round_half_up(successes / len(ratings) * 100, 1),
            ))
        results.sort(key=lambda t: t.success_rate, reverse=True)
        return results

    def cycle_patterns(self, records: list[PainRecord]) -> list[CyclePattern]:
        """Average pain per menstrual phase, highest first."""
        phases: dict[MenstrualStatus, list[PainRecord]] = {}
        for record in records:
            phases.setdefault(record.menstrual_status, []).append(record)

        patterns = []
        for phase, phase_records in phases.items():
            symptom_counts = Counter(s.value for r in phase_records for s in r.symptoms)
            average = sum(r.pain_level for r in phase_records) / len(phase_records)
            patterns.append(CyclePattern(
                phase=phase,
                average_pain_level=round_half_up(average, 1),
                common_symptoms=[s for s, _ in symptom_counts.most_common(3)],
                frequency=len(phase_records),
            ))
        patterns.sort(key=lambda p: p.average_pain_level, reverse=True)
        return patterns

    def generate_insights(self, analytics: PainAnalytics) -> list[str]:
        """Plain-language observations about the analytics."""
        insights = []

        if analytics.total_records:
            if analytics.average_pain_level > 7:
                insights.append(
                    "Your average pain level is high (>7). Consider discussing pain management "
                    "strategies with your healthcare provider."
                )
            elif analytics.average_pain_level < 3:
                insights.append(
                    "Your average pain level is relatively low. Your current management approach "
                    "appears to be working well."
                )

        if analytics.common_pain_types:
            top = analytics.common_pain_types[0]
            if top["percentage"] > 60:
                insights.append(
                    f"{top['type'].replace('_', ' ').title()} is your most common pain type "
                    f"({top['percentage']:.1f}%). This consistency may help with targeted treatment."
                )

        effective = [t for t in analytics.effective_treatments if t.success_rate > 70]
        if effective:
            best = effective[0]
            insights.append(
                f"{best.treatment} shows high effectiveness ({best.success_rate:.1f}% success rate). "
                "Consider using this as a primary treatment option."
            )

        high_phases = [p for p in analytics.cycle_patterns if p.average_pain_level > 6]
        if high_phases:
            phases = ", ".join(p.phase.display for p in high_phases)
            insights.append(
                f"Pain levels are highest during: {phases}. Consider preventive measures during these phases."
            )

        if len(analytics.trend_data) >= MIN_TREND_POINTS:
            if analytics.trend == "improving":
                insights.append(
                    "Your pain levels show an improving trend over time. Keep up your current management approach."
                )
            elif analytics.trend == "worsening":
                insights.append(
                    "Your pain levels show a concerning upward trend. Consider consulting with your healthcare provider."
                )

        if analytics.total_records < 10:
            insights.append(
                "Continue tracking to build a more comprehensive picture of your pain patterns. "
                "More data will enable better insights."
            )
        elif analytics.total_records > 50:
            insights.append(
                "You have excellent tracking consistency! This comprehensive data provides valuable "
                "insights for pain management."
            )

        return insights

    def find_patterns(self, records: Optional[list[PainRecord]] = None) -> list[PainPattern]:
        """Menstrual, treatment, seasonal and trigger patterns, most confident first."""
        records = self._pain_records(records)
        if len(records) < 3:
            return []

        patterns: list[PainPattern] = []
        patterns.extend(self._menstrual_patterns(records))
        patterns.extend(self._treatment_patterns(records))
        patterns.extend(self._seasonal_patterns(records))
        patterns.extend(self._trigger_patterns(records))
        patterns.sort(key=lambda p: p.confidence, reverse=True)
        return patterns

    def _menstrual_patterns(self, records: list[PainRecord]) -> list[PainPattern]:
        cycle = self.cycle_patterns(records)
        high = [p for p in cycle if p.average_pain_level > 6]
        if not high:
            return []
        return [PainPattern(
            pattern_type="menstrual_cycle",
            description=(
                "Pain levels are consistently higher during "
                f"{', '.join(p.phase.display for p in high)}"
            ),
            confidence=min(0.9, len(high) / len(cycle)),
            recommendations=[
                "Plan preventive pain relief before these phases",
                "Schedule lighter activities during high-pain phases",
            ],
        )]

    def _treatment_patterns(self, records: list[PainRecord]) -> list[PainPattern]:
        treatments = self.treatment_effectiveness(records)
        patterns = []

        highly_effective = [t for t in treatments if t.success_rate > 80 and t.usage_count >= 3]
        if highly_effective:
            best = highly_effective[0]
            patterns.append(PainPattern(
                pattern_type="treatment_response",
                description=f"{best.treatment} shows consistently high effectiveness ({best.success_rate}% success rate)",
                confidence=min(0.9, best.usage_count / 10),
                recommendations=[f"Continue using {best.treatment} as a primary option"],
            ))

        ineffective = [t for t in treatments if t.success_rate < 30 and t.usage_count >= 3]
        if ineffective:
            worst = ineffective[0]
            patterns.append(PainPattern(
                pattern_type="treatment_response",
                description=f"{worst.treatment} shows low effectiveness ({worst.success_rate}% success rate)",
                confidence=min(0.8, worst.usage_count / 10),
                recommendations=["Discuss alternative treatments with your healthcare provider"],
            ))
        return patterns

    def _seasonal_patterns(self, records: list[PainRecord]) -> list[PainPattern]:
        if len(records) < 20:
            return []
        df = self.build_dataframe(records)
        monthly = df.groupby("month")["pain_level"].agg(["mean", "count"])
        monthly = monthly[monthly["count"] >= 3]
        if len(monthly) < 6:
            return []

        highest, lowest = monthly["mean"].idxmax(), monthly["mean"].idxmin()
        if monthly.loc[highest, "mean"] - monthly.loc[lowest, "mean"] <= 2:
            return []
        return [PainPattern(
            pattern_type="seasonal",
            description=(
                f"Pain levels tend to be higher in {MONTH_NAMES[highest - 1]} "
                f"and lower in {MONTH_NAMES[lowest - 1]}"
            ),
            confidence=0.7,
            recommendations=["Prepare extra support in months that tend to be harder"],
        )]

    def _trigger_patterns(self, records: list[PainRecord]) -> list[PainPattern]:
        by_symptom: dict[str, list[int]] = {}
        for record in records:
            for symptom in record.symptoms:
                by_symptom.setdefault(symptom.value, []).append(record.pain_level)

        candidates = [
            (symptom, sum(levels) / len(levels), len(levels))
            for symptom, levels in by_symptom.items()
            if len(levels) >= 3
        ]
        candidates.sort(key=lambda c: c[1], reverse=True)
        if not candidates or candidates[0][1] <= 7:
            return []

        symptom, average, frequency = candidates[0]
        label = symptom.replace("_", " ").title()
        return [PainPattern(
            pattern_type="trigger_identification",
            description=f"{label} is associated with higher pain levels (avg: {average:.1f})",
            confidence=min(0.8, frequency / len(records)),
            recommendations=[
                f"Monitor for early signs of {label}",
                "Consider preventive measures when this symptom appears",
                "Discuss this pattern with your healthcare provider",
            ],
        )]

    def predict_trend(self, records: Optional[list[PainRecord]] = None, days: int = 7) -> list[dict]:
        """Project pain levels for the next days from the recent slope."""
        records = self._pain_records(records)
        if len(records) < MIN_PREDICTION_RECORDS:
            return []

        ordered = sorted(records, key=lambda r: r.recorded_at)
        recent = ordered[-30:]
        slope = trend_slope([r.pain_level for r in recent])
        last = ordered[-1]

        return [
            {
                "date": (last.entry_date + timedelta(days=i)).isoformat(),
                "pain_level": round_half_up(clamp(last.pain_level + slope * i, 0, 10), 1),
            }
            for i in range(1, days + 1)
        ]

    def analyze_correlations(self, records: Optional[list[PainRecord]] = None) -> list[CorrelationResult]:
        """Pearson correlations between pain level and recorded factors."""
        df = self.build_dataframe(records)
        if df.empty:
            return []

        factors = [
            ("effectiveness", "Treatment Effectiveness"),
            ("symptom_count", "Number of Symptoms"),
            ("medication_count", "Number of Medications"),
        ]

        results = []
        for col, name in factors:
            mask = df[col].notna() & df["pain_level"].notna()
            x = df.loc[mask, col].astype(float)
            y = df.loc[mask, "pain_level"].astype(float)

            if len(x) < MIN_CORRELATION_SAMPLES or x.nunique() < 2 or y.nunique() < 2:
                continue

            try:
                r, p = stats.pearsonr(x, y)
            except ValueError as e:
                logger.debug(f"Skipping correlation for {name}: {e}")
                continue

            results.append(CorrelationResult(
                factor=name,
                correlation=float(r),
                p_value=float(p),
                n_samples=len(x),
                interpretation=self._interpret_correlation(name, float(r), float(p)),
            ))

        results.sort(key=lambda c: abs(c.correlation), reverse=True)
        return results

    def _interpret_correlation(self, factor: str, r: float, p: float) -> str:
        """Generate human-readable interpretation of correlation."""
        if p >= 0.05:
            return f"No significant relationship found between {factor} and pain level."

        strength = "weak" if abs(r) < 0.3 else "moderate" if abs(r) < 0.5 else "strong"

        if factor == "Treatment Effectiveness" and r < 0:
            return f"Treatments work less well on high-pain days ({strength} correlation). Consider starting relief earlier."
        if factor == "Number of Symptoms" and r > 0:
            return f"More accompanying symptoms come with higher pain ({strength} correlation)."

        direction = "higher" if r > 0 else "lower"
        return f"{factor} shows a {strength} correlation with {direction} pain levels."

    # Symptom journal

    def symptom_summary(self, entries: Optional[list[SymptomEntry]] = None) -> dict:
        """Averages and the first-half versus second-half trend of the symptom journal."""
        if entries is None:
            with self.storage as storage:
                entries = storage.list_symptom_entries()
        if not entries:
            return {"total": 0, "average_pain": 0.0, "max_pain": 0, "trend": "stable", "top_symptoms": []}

        df = pd.DataFrame([
            {"date": e.entry_date, "pain_level": e.pain_level} for e in entries
        ]).sort_values("date")
        levels = df["pain_level"].tolist()

        trend = "stable"
        if len(levels) >= 2:
            half = len(levels) // 2
            first, second = levels[:half], levels[half:]
            difference = sum(second) / len(second) - sum(first) / len(first)
            if difference < -0.5:
                trend = "improving"
            elif difference > 0.5:
                trend = "worsening"

        symptoms = Counter(s for e in entries for s in e.symptoms)
        return {
            "total": len(entries),
            "average_pain": round_half_up(float(df["pain_level"].mean()), 1),
            "max_pain": int(df["pain_level"].max()),
            "trend": trend,
            "top_symptoms": symptoms.most_common(5),
        }

    # Stress progress

    def progress_statistics(self, entries: Optional[list[ProgressEntry]] = None) -> ProgressStatistics:
        """
        Stress progress statistics.

        The improvement trend compares the average stress of the last seven
        entries with the seven before them, as a percentage of the earlier
        average; positive numbers mean stress went down.
        """
        if entries is None:
            with self.storage as storage:
                entries = storage.list_progress()
        if not entries:
            return ProgressStatistics()

        ordered = sorted(entries, key=lambda e: e.timestamp)
        df = pd.DataFrame([
            {
                "stress": e.stress_level,
                "mood": e.mood_rating,
                "used_techniques": bool(e.techniques),
            }
            for e in ordered
        ])

        recent = df["stress"].iloc[-7:]
        previous = df["stress"].iloc[-14:-7]
        previous_avg = float(previous.mean()) if len(previous) else 0.0
        recent_avg = float(recent.mean()) if len(recent) else 0.0
        trend = (previous_avg - recent_avg) / previous_avg * 100 if previous_avg > 0 else 0.0

        techniques = Counter(t.value for e in ordered for t in e.techniques)

        return ProgressStatistics(
            total_entries=len(df),
            average_stress_level=round_half_up(float(df["stress"].mean()), 1),
            average_mood_rating=round_half_up(float(df["mood"].mean()), 1),
            techniques_used_rate=round_half_up(float(df["used_techniques"].mean()) * 100, 1),
            most_used_techniques=[
                {"technique": name, "count": count} for name, count in techniques.most_common(5)
            ],
            improvement_trend=round(trend, 1),
        )

    def chart_data(self, records: Optional[list[PainRecord]] = None, days: int = 90) -> dict:
        """Series for the dashboard charts."""
        df = self.build_dataframe(records)
        if df.empty:
            return {}

        cutoff = pd.Timestamp(date.today() - timedelta(days=days))
        recent = df[df["date"] >= cutoff]
        daily = recent.groupby(recent["date"].dt.strftime("%Y-%m-%d"))["pain_level"].max()

        return {
            "dates": daily.index.tolist(),
            "pain_levels": [int(v) for v in daily.tolist()],
            "by_phase": {
                status: round_half_up(float(level), 1)
                for status, level in df.groupby("menstrual_status")["pain_level"].mean().items()
            },
        }
