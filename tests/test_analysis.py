"""Tests for the analysis service."""

from datetime import date, time, timedelta

import pytest

from periodhub.models import (
    Medication,
    MenstrualStatus,
    PainRecord,
    PainSymptom,
    PainType,
    ProgressEntry,
    SymptomEntry,
    Technique,
)
from periodhub.services.analysis import (
    AnalysisService,
    CorrelationResult,
    classify_trend,
    trend_slope,
)


def _days_ago(n: int) -> date:
    return date.today() - timedelta(days=n)


def _record(days_ago: int, pain: int, **kwargs) -> PainRecord:
    return PainRecord(entry_date=_days_ago(days_ago), entry_time=time(9, 0), pain_level=pain, **kwargs)


def _series(levels: list[int], **kwargs) -> list[PainRecord]:
    """One record per day, oldest first, ending yesterday."""
    return [_record(len(levels) - i, level, **kwargs) for i, level in enumerate(levels)]


@pytest.fixture
def service(storage):
    return AnalysisService(storage)


class TestTrend:
    """Tests for trend helpers."""

    def test_slope(self):
        """Test least-squares slope."""
        assert trend_slope([1, 2, 3, 4]) == pytest.approx(1.0)
        assert trend_slope([5]) == 0.0

    def test_classify(self):
        """Test trend labels."""
        assert classify_trend([1, 2, 3, 4, 5]) == "worsening"
        assert classify_trend([8, 7, 6, 5, 4]) == "improving"
        assert classify_trend([5, 5, 5, 5, 5]) == "stable"

    def test_too_few_points(self):
        """Test that short series are stable."""
        assert classify_trend([1, 5, 9]) == "stable"


class TestPainAnalytics:
    """Tests for pain analytics."""

    def test_empty(self, service):
        """Test analytics with no records."""
        analytics = service.pain_analytics([])
        assert analytics.is_empty
        assert any("Continue tracking" in i for i in analytics.insights)

    def test_reads_storage(self, service, storage):
        """Test that records are loaded from storage when none are given."""
        storage.add_pain_record(_record(2, 4))
        storage.add_pain_record(_record(1, 6))
        analytics = service.pain_analytics()
        assert analytics.total_records == 2
        assert analytics.average_pain_level == 5.0

    def test_aggregates(self, service):
        """Test averages, frequencies and distribution."""
        records = [
            _record(3, 2, pain_types=[PainType.CRAMPING]),
            _record(2, 4, pain_types=[PainType.CRAMPING, PainType.SHARP]),
            _record(1, 9, pain_types=[PainType.CRAMPING]),
        ]
        analytics = service.pain_analytics(records)

        assert analytics.total_records == 3
        assert analytics.average_pain_level == 5.0
        assert analytics.common_pain_types[0] == {"type": "cramping", "count": 3, "percentage": 75.0}
        assert analytics.pain_distribution == {"Mild (1-3)": 1, "Moderate (4-6)": 1, "Severe (7-10)": 1}
        assert [d["pain_level"] for d in analytics.trend_data] == [2, 4, 9]
        assert analytics.trend == "stable"

    def test_high_average_insight(self, service):
        """Test the high pain insight."""
        analytics = service.pain_analytics(_series([8, 9, 8]))
        assert any("high (>7)" in i for i in analytics.insights)

    def test_treatment_effectiveness(self, service):
        """Test per-medication success rates."""
        ibuprofen = [Medication(name="Ibuprofen")]
        records = [
            _record(4, 6, medications=ibuprofen, effectiveness=8),
            _record(3, 6, medications=[Medication(name="ibuprofen ")], effectiveness=9),
            _record(2, 6, medications=ibuprofen, effectiveness=5),
            _record(1, 6, medications=[Medication(name="Heat pad")], effectiveness=10),
        ]
        treatments = service.treatment_effectiveness(records)
        assert len(treatments) == 1
        assert treatments[0].treatment == "Ibuprofen"
        assert treatments[0].usage_count == 3
        assert treatments[0].average_effectiveness == 7.3
        assert treatments[0].success_rate == 66.7

    def test_cycle_patterns(self, service):
        """Test phase averages, highest first."""
        records = [
            _record(3, 8, menstrual_status=MenstrualStatus.DAY_1),
            _record(2, 6, menstrual_status=MenstrualStatus.DAY_1),
            _record(1, 2, menstrual_status=MenstrualStatus.AFTER_PERIOD),
        ]
        patterns = service.cycle_patterns(records)
        assert patterns[0].phase == MenstrualStatus.DAY_1
        assert patterns[0].average_pain_level == 7.0
        assert patterns[0].frequency == 2


class TestPatterns:
    """Tests for pattern detection."""

    def test_too_few_records(self, service):
        """Test that fewer than three records give no patterns."""
        assert service.find_patterns(_series([9, 9])) == []

    def test_menstrual_and_trigger(self, service):
        """Test phase and symptom patterns."""
        nausea = [PainSymptom.NAUSEA]
        records = [
            _record(6, 8, menstrual_status=MenstrualStatus.DAY_1, symptoms=nausea),
            _record(5, 9, menstrual_status=MenstrualStatus.DAY_1, symptoms=nausea),
            _record(4, 8, menstrual_status=MenstrualStatus.DAY_1, symptoms=nausea),
            _record(3, 2, menstrual_status=MenstrualStatus.AFTER_PERIOD),
        ]
        patterns = service.find_patterns(records)
        kinds = {p.pattern_type: p for p in patterns}

        assert kinds["menstrual_cycle"].confidence == 0.5
        assert "Day 1" in kinds["menstrual_cycle"].description
        assert kinds["trigger_identification"].confidence == 0.75
        assert "Nausea" in kinds["trigger_identification"].description
        assert patterns[0].pattern_type == "trigger_identification"

    def test_treatment_response(self, service):
        """Test a highly effective treatment."""
        records = _series([6, 6, 6], medications=[Medication(name="naproxen")], effectiveness=9)
        patterns = service.find_patterns(records)
        assert patterns[0].pattern_type == "treatment_response"
        assert "Naproxen" in patterns[0].description


class TestPrediction:
    """Tests for the pain trend projection."""

    def test_needs_ten_records(self, service):
        """Test that short histories give no prediction."""
        assert service.predict_trend(_series([5] * 9)) == []

    def test_flat_history(self, service):
        """Test that a flat history projects a flat line."""
        records = _series([5] * 10)
        predictions = service.predict_trend(records, days=3)
        assert [p["pain_level"] for p in predictions] == [5.0, 5.0, 5.0]
        assert predictions[0]["date"] == date.today().isoformat()

    def test_clamped(self, service):
        """Test that projections stay within 0-10."""
        predictions = service.predict_trend(_series(list(range(1, 11))), days=7)
        assert max(p["pain_level"] for p in predictions) == 10


class TestCorrelations:
    """Tests for correlation analysis."""

    def test_symptom_count(self, service):
        """Test a perfect positive correlation with symptom count."""
        symptoms = list(PainSymptom)
        records = [
            _record(7 - i, i + 1, symptoms=symptoms[:i])
            for i in range(6)
        ]
        results = service.analyze_correlations(records)

        assert len(results) == 1
        result = results[0]
        assert result.factor == "Number of Symptoms"
        assert result.correlation == pytest.approx(1.0)
        assert result.is_significant
        assert result.interpretation.startswith("More accompanying symptoms")

    def test_not_enough_data(self, service):
        """Test that small samples are skipped."""
        assert service.analyze_correlations(_series([1, 2, 3])) == []

    def test_result_properties(self):
        """Test strength and direction labels."""
        result = CorrelationResult("x", correlation=-0.55, p_value=0.2, n_samples=8, interpretation="")
        assert result.strength == "strong"
        assert result.direction == "negative"
        assert not result.is_significant


class TestSymptomSummary:
    """Tests for the symptom journal summary."""

    def test_empty(self, service):
        """Test the summary of an empty journal."""
        assert service.symptom_summary([])["total"] == 0

    def test_summary(self, service):
        """Test averages and the half-over-half trend."""
        entries = [
            SymptomEntry(entry_date=_days_ago(4), pain_level=2, symptoms=["cramps"]),
            SymptomEntry(entry_date=_days_ago(3), pain_level=2, symptoms=["cramps", "fatigue"]),
            SymptomEntry(entry_date=_days_ago(2), pain_level=6),
            SymptomEntry(entry_date=_days_ago(1), pain_level=6, symptoms=["cramps"]),
        ]
        summary = service.symptom_summary(entries)
        assert summary["total"] == 4
        assert summary["average_pain"] == 4.0
        assert summary["max_pain"] == 6
        assert summary["trend"] == "worsening"
        assert summary["top_symptoms"][0] == ("cramps", 3)


class TestProgressStatistics:
    """Tests for stress progress statistics."""

    def test_empty(self, service):
        """Test statistics with no entries."""
        assert service.progress_statistics([]).total_entries == 0

    def test_improvement(self, service):
        """Test the week-over-week improvement percentage."""
        entries = [
            ProgressEntry(
                entry_date=_days_ago(14 - i),
                stress_level=8 if i < 7 else 4,
                mood_rating=5,
                techniques=[Technique.YOGA] if i % 2 == 0 else [],
                timestamp=1000.0 + i,
            )
            for i in range(14)
        ]
        stats = service.progress_statistics(entries)
        assert stats.total_entries == 14
        assert stats.average_stress_level == 6.0
        assert stats.improvement_trend == 50.0
        assert stats.techniques_used_rate == 50.0
        assert stats.most_used_techniques == [{"technique": "yoga", "count": 7}]


class TestChartData:
    """Tests for dashboard series."""

    def test_empty(self, service):
        """Test no data."""
        assert service.chart_data([]) == {}

    def test_series(self, service):
        """Test dates, levels and phase averages."""
        records = [
            _record(200, 9),
            _record(2, 3, menstrual_status=MenstrualStatus.DAY_2_3),
            _record(1, 5, menstrual_status=MenstrualStatus.DAY_2_3),
        ]
        data = service.chart_data(records)
        assert data["dates"] == [_days_ago(2).isoformat(), _days_ago(1).isoformat()]
        assert data["pain_levels"] == [3, 5]
        assert data["by_phase"] == {"day_1": 9.0, "day_2_3": 4.0}
