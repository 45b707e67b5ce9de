"""Tests for pain record validation."""

from datetime import date, datetime, time

import pytest

from periodhub.exceptions import ValidationFailed
from periodhub.models import MenstrualStatus, PainType
from periodhub.services.validation import PainRecordValidator, build_pain_record

NOW = datetime(2024, 3, 1, 10, 0)


def _data(**overrides):
    data = {"pain_level": "6", "entry_date": "2024-02-28", "entry_time": "08:30"}
    data.update(overrides)
    return data


@pytest.fixture
def validator():
    return PainRecordValidator()


class TestPainRecordValidator:
    """Tests for PainRecordValidator."""

    def test_valid(self, validator):
        """Test a minimal valid record."""
        result = validator.validate(_data(), now=NOW)
        assert result.is_valid
        assert result.warnings == []

    @pytest.mark.parametrize("value,message", [
        (None, "Pain level is required"),
        ("", "Pain level is required"),
        ("high", "Pain level must be a whole number"),
        ("11", "Pain level must be between 0 and 10"),
        (-1, "Pain level must be between 0 and 10"),
    ])
    def test_pain_level(self, validator, value, message):
        """Test pain level errors."""
        result = validator.validate(_data(pain_level=value), now=NOW)
        assert message in result.errors

    def test_future_date(self, validator):
        """Test that a date after today is an error."""
        result = validator.validate(_data(entry_date="2024-03-02"), now=NOW)
        assert "Date cannot be in the future" in result.errors

    def test_bad_date_format(self, validator):
        """Test a non-ISO date."""
        result = validator.validate(_data(entry_date="01/03/2024"), now=NOW)
        assert "Date must be in YYYY-MM-DD format" in result.errors

    def test_date_object_accepted(self, validator):
        """Test that date objects from the API pass through."""
        assert validator.validate(_data(entry_date=date(2024, 2, 1), entry_time=time(7, 15)), now=NOW).is_valid

    def test_future_time_today(self, validator):
        """Test that a later time today is an error."""
        result = validator.validate(_data(entry_date="2024-03-01", entry_time="11:00"), now=NOW)
        assert "Time cannot be in the future" in result.errors

    def test_earlier_time_today(self, validator):
        """Test that an earlier time today is fine."""
        assert validator.validate(_data(entry_date="2024-03-01", entry_time="09:59"), now=NOW).is_valid

    @pytest.mark.parametrize("value", ["8:30", "24:00", "12:60", "noon"])
    def test_time_format(self, validator, value):
        """Test HH:MM enforcement."""
        result = validator.validate(_data(entry_time=value), now=NOW)
        assert "Time must be in HH:MM format" in result.errors

    def test_notes_too_long(self, validator):
        """Test the notes length limit."""
        result = validator.validate(_data(notes="x" * 501), now=NOW)
        assert "Notes cannot exceed 500 characters" in result.errors

    @pytest.mark.parametrize("notes", [123, ["a", "b"], {"text": "x"}])
    def test_notes_must_be_text(self, validator, notes):
        """Test that non-string notes are reported instead of crashing."""
        result = validator.validate(_data(notes=notes), now=NOW)
        assert not result.is_valid
        assert result.errors == ["Notes must be text"]

    @pytest.mark.parametrize("notes", [
        "my ssn is 123-45-6789",
        "card 4111 1111 1111 1111",
        "email me at someone@example.com",
    ])
    def test_sensitive_notes_warn(self, validator, notes):
        """Test that sensitive-looking notes warn but do not block."""
        result = validator.validate(_data(notes=notes), now=NOW)
        assert result.is_valid
        assert len(result.warnings) == 1

    def test_medication_without_effectiveness(self, validator):
        """Test the effectiveness reminder."""
        result = validator.validate(_data(medications=["ibuprofen"]), now=NOW)
        assert result.warnings == ["Consider rating how effective the medication was"]

    def test_medication_with_zero_pain(self, validator):
        """Test the zero-pain medication warning."""
        result = validator.validate(_data(pain_level="0", medications=["ibuprofen"], effectiveness="5"), now=NOW)
        assert result.warnings == ["Medication recorded with a pain level of 0"]

    def test_effectiveness_range(self, validator):
        """Test effectiveness errors."""
        assert "Effectiveness must be between 0 and 10" in validator.validate(_data(effectiveness="12"), now=NOW).errors
        assert "Effectiveness must be a whole number" in validator.validate(_data(effectiveness="good"), now=NOW).errors

    def test_collects_all_errors(self, validator):
        """Test that every problem is reported at once."""
        result = validator.validate({}, now=NOW)
        assert len(result.errors) == 3


class TestBuildPainRecord:
    """Tests for build_pain_record."""

    def test_builds_record(self):
        """Test a full record from form-like strings."""
        record, warnings = build_pain_record(_data(
            duration_minutes="45",
            pain_types=["cramping"],
            menstrual_status="day_2_3",
            medications=["ibuprofen"],
            effectiveness="7",
            notes="",
        ), now=NOW)
        assert warnings == []
        assert record.pain_level == 6
        assert record.entry_date == date(2024, 2, 28)
        assert record.entry_time == time(8, 30)
        assert record.duration_minutes == 45
        assert record.pain_types == [PainType.CRAMPING]
        assert record.menstrual_status == MenstrualStatus.DAY_2_3
        assert record.medications[0].name == "ibuprofen"
        assert record.notes is None

    def test_medication_dicts(self):
        """Test medications given with dosage."""
        record, _ = build_pain_record(_data(
            medications=[{"name": "naproxen", "dosage": "220mg"}], effectiveness="5",
        ), now=NOW)
        assert record.medications[0].dosage == "220mg"

    def test_invalid_raises(self):
        """Test that validation errors raise with every message."""
        with pytest.raises(ValidationFailed) as exc:
            build_pain_record(_data(pain_level="", entry_date="2024-03-05"), now=NOW)
        assert "Pain level is required" in exc.value.errors
        assert "Date cannot be in the future" in exc.value.errors

    def test_unknown_enum_raises(self):
        """Test that model errors are reported as validation failures."""
        with pytest.raises(ValidationFailed):
            build_pain_record(_data(pain_types=["stabbing"]), now=NOW)
