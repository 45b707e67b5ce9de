"""Tests for data models."""

from datetime import date, time, timedelta

import pytest
from pydantic import ValidationError

from periodhub.models import (
    Flow,
    MenstrualStatus,
    Mood,
    PainRecord,
    ProgressEntry,
    SymptomEntry,
    Technique,
)
from periodhub.models.journal import validate_not_future


class TestValidateNotFuture:
    """Tests for the shared date check."""

    def test_today_allowed(self):
        """Test that today is accepted."""
        assert validate_not_future(date.today()) == date.today()

    def test_future_rejected(self):
        """Test that tomorrow is rejected."""
        with pytest.raises(ValueError, match="future"):
            validate_not_future(date.today() + timedelta(days=1))

    def test_explicit_today(self):
        """Test checking against a given reference day."""
        assert validate_not_future(date(2024, 3, 1), today=date(2024, 3, 1)) == date(2024, 3, 1)
        with pytest.raises(ValueError):
            validate_not_future(date(2024, 3, 2), today=date(2024, 3, 1))


class TestSymptomEntry:
    """Tests for the SymptomEntry model."""

    def test_create_entry(self, past_day):
        """Test basic entry creation and defaults."""
        entry = SymptomEntry(entry_date=past_day, pain_level=4)
        assert entry.id.startswith("sym_")
        assert entry.mood == Mood.NEUTRAL
        assert entry.flow == Flow.NONE
        assert entry.symptoms == []
        assert entry.has_medications is False

    def test_future_date_rejected(self):
        """Test that a future date fails validation."""
        with pytest.raises(ValidationError):
            SymptomEntry(entry_date=date.today() + timedelta(days=1), pain_level=3)

    def test_pain_level_bounds(self, past_day):
        """Test the 0-10 pain range."""
        SymptomEntry(entry_date=past_day, pain_level=0)
        SymptomEntry(entry_date=past_day, pain_level=10)
        with pytest.raises(ValidationError):
            SymptomEntry(entry_date=past_day, pain_level=11)

    def test_blank_items_stripped(self, past_day):
        """Test that blank symptoms and medications are dropped."""
        entry = SymptomEntry(
            entry_date=past_day,
            pain_level=5,
            symptoms=[" cramps ", "", "  "],
            medications=["ibuprofen", " "],
        )
        assert entry.symptoms == ["cramps"]
        assert entry.medications == ["ibuprofen"]
        assert entry.has_medications is True

    def test_mood_display(self):
        """Test human-readable mood."""
        assert Mood.VERY_LOW.display == "Very Low"


class TestProgressEntry:
    """Tests for the ProgressEntry model."""

    def test_create_entry(self, past_day):
        """Test id format and techniques."""
        entry = ProgressEntry(
            entry_date=past_day,
            stress_level=6,
            mood_rating=7,
            techniques=[Technique.BREATHING, "yoga"],
        )
        assert entry.id.startswith("entry_")
        assert entry.techniques == [Technique.BREATHING, Technique.YOGA]
        assert entry.timestamp > 0

    def test_stress_range(self, past_day):
        """Test that stress starts at 1."""
        with pytest.raises(ValidationError):
            ProgressEntry(entry_date=past_day, stress_level=0, mood_rating=5)

    def test_future_date_rejected(self):
        """Test that a future date fails validation."""
        with pytest.raises(ValidationError):
            ProgressEntry(entry_date=date.today() + timedelta(days=2), stress_level=5, mood_rating=5)

    def test_colors(self, past_day):
        """Test badge colors at the thresholds."""
        assert ProgressEntry(entry_date=past_day, stress_level=8, mood_rating=8).stress_color == "red"
        assert ProgressEntry(entry_date=past_day, stress_level=5, mood_rating=5).stress_color == "yellow"
        assert ProgressEntry(entry_date=past_day, stress_level=4, mood_rating=4).stress_color == "green"
        assert ProgressEntry(entry_date=past_day, stress_level=4, mood_rating=4).mood_color == "red"

    def test_technique_labels(self):
        """Test localized technique labels."""
        assert Technique.MEDITATION.label("en") == "Meditation"
        assert Technique.MEDITATION.label("zh") == "冥想"


class TestPainRecord:
    """Tests for the PainRecord model."""

    def test_create_record(self, past_day):
        """Test defaults."""
        record = PainRecord(entry_date=past_day, entry_time=time(9, 30), pain_level=6)
        assert record.id.startswith("pain_")
        assert record.menstrual_status == MenstrualStatus.DAY_1
        assert record.recorded_at.hour == 9

    def test_future_date_rejected(self):
        """Test that a future date fails validation."""
        with pytest.raises(ValidationError):
            PainRecord(entry_date=date.today() + timedelta(days=1), entry_time=time(8, 0), pain_level=3)

    def test_pain_range(self, past_day):
        """Test distribution buckets."""
        assert PainRecord(entry_date=past_day, entry_time=time(8), pain_level=3).pain_range == "Mild (1-3)"
        assert PainRecord(entry_date=past_day, entry_time=time(8), pain_level=6).pain_range == "Moderate (4-6)"
        assert PainRecord(entry_date=past_day, entry_time=time(8), pain_level=7).pain_range == "Severe (7-10)"

    def test_notes_length(self, past_day):
        """Test the 500 character notes limit."""
        with pytest.raises(ValidationError):
            PainRecord(entry_date=past_day, entry_time=time(8), pain_level=3, notes="x" * 501)

    def test_status_display(self):
        """Test cycle phase labels."""
        assert MenstrualStatus.DAY_2_3.display == "Days 2-3"
