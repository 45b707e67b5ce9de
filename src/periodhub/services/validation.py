"""Validation of pain tracker input before it becomes a PainRecord."""

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional

from pydantic import ValidationError

from ..exceptions import ValidationFailed
from ..models.pain import Medication, MenstrualStatus, PainRecord

MAX_NOTES_LENGTH = 500

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")

# Sensitive data the user probably did not mean to write into notes
SENSITIVE_PATTERNS = [
    (re.compile(r"\b\d{3}-\d{2}-\d{4}\b"), "Notes look like they contain a social security number"),
    (re.compile(r"\b(?:\d{4}[- ]?){3}\d{4}\b"), "Notes look like they contain a card number"),
    (re.compile(r"\b[\w.+-]+@[\w-]+\.[\w.-]+\b"), "Notes look like they contain an e-mail address"),
]


@dataclass
class ValidationResult:
    """Errors block saving, warnings are shown but allowed."""
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


class PainRecordValidator:
    """Checks a raw pain record mapping (form or API payload)."""

    def validate(self, data: dict[str, Any], now: Optional[datetime] = None) -> ValidationResult:
        now = now or datetime.now()
        result = ValidationResult()

        self._check_pain_level(data.get("pain_level"), result)
        entry_date = self._check_date(data.get("entry_date"), now.date(), result)
        self._check_time(data.get("entry_time"), entry_date, now, result)
        self._check_notes(data.get("notes"), result)
        self._check_medications(data, result)

        return result

    def _check_pain_level(self, value: Any, result: ValidationResult) -> None:
        if value is None or value == "":
            result.errors.append("Pain level is required")
            return
        try:
            level = int(value)
        except (TypeError, ValueError):
            result.errors.append("Pain level must be a whole number")
            return
        if not 0 <= level <= 10:
            result.errors.append("Pain level must be between 0 and 10")

    def _check_date(self, value: Any, today: date, result: ValidationResult) -> Optional[date]:
        if not value:
            result.errors.append("Date is required")
            return None
        if isinstance(value, date):
            parsed = value
        else:
            try:
                parsed = datetime.strptime(str(value), "%Y-%m-%d").date()
            except ValueError:
                result.errors.append("Date must be in YYYY-MM-DD format")
                return None
        if parsed > today:
            result.errors.append("Date cannot be in the future")
        return parsed

    def _check_time(
        self,
        value: Any,
        entry_date: Optional[date],
        now: datetime,
        result: ValidationResult,
    ) -> None:
        if not value:
            result.errors.append("Time is required")
            return
        text = value.strftime("%H:%M") if hasattr(value, "strftime") else str(value)
        if not TIME_PATTERN.match(text):
            result.errors.append("Time must be in HH:MM format")
            return
        if entry_date == now.date():
            recorded = datetime.combine(entry_date, datetime.strptime(text, "%H:%M").time())
            if recorded > now:
                result.errors.append("Time cannot be in the future")

    def _check_notes(self, notes: Any, result: ValidationResult) -> None:
        if notes is None or notes == "":
            return
        if not isinstance(notes, str):
            result.errors.append("Notes must be text")
            return
        if len(notes) > MAX_NOTES_LENGTH:
            result.errors.append(f"Notes cannot exceed {MAX_NOTES_LENGTH} characters")
        for pattern, message in SENSITIVE_PATTERNS:
            if pattern.search(notes):
                result.warnings.append(message)

    def _check_medications(self, data: dict[str, Any], result: ValidationResult) -> None:
        medications = [m for m in data.get("medications") or [] if m]
        effectiveness = data.get("effectiveness")

        if effectiveness not in (None, ""):
            try:
                if not 0 <= int(effectiveness) <= 10:
                    result.errors.append("Effectiveness must be between 0 and 10")
            except (TypeError, ValueError):
                result.errors.append("Effectiveness must be a whole number")

        if medications and effectiveness in (None, ""):
            result.warnings.append("Consider rating how effective the medication was")

        try:
            level = int(data.get("pain_level"))
        except (TypeError, ValueError):
            return
        if level == 0 and medications:
            result.warnings.append("Medication recorded with a pain level of 0")


def _medications(values: list[Any]) -> list[Medication]:
    medications = []
    for value in values:
        if not value:
            continue
        if isinstance(value, str):
            medications.append(Medication(name=value.strip()))
        else:
            medications.append(Medication.model_validate(value))
    return medications


def build_pain_record(data: dict[str, Any], now: Optional[datetime] = None) -> tuple[PainRecord, list[str]]:
    """
    Validate a raw pain record mapping and build the record.

    Raises ValidationFailed with every error found; returns the record and
    any warnings otherwise.
    """
    result = PainRecordValidator().validate(data, now=now)
    if not result.is_valid:
        raise ValidationFailed(result.errors, result.warnings)

    effectiveness = data.get("effectiveness")
    duration = data.get("duration_minutes")
    try:
        record = PainRecord(
            entry_date=data["entry_date"],
            entry_time=data["entry_time"],
            pain_level=int(data["pain_level"]),
            duration_minutes=int(duration) if duration not in (None, "") else None,
            pain_types=data.get("pain_types") or [],
            locations=data.get("locations") or [],
            symptoms=data.get("symptoms") or [],
            menstrual_status=data.get("menstrual_status") or MenstrualStatus.DAY_1,
            medications=_medications(data.get("medications") or []),
            effectiveness=int(effectiveness) if effectiveness not in (None, "") else None,
            lifestyle_factors=data.get("lifestyle_factors") or [],
            notes=data.get("notes") or None,
        )
    except (TypeError, ValueError) as e:
        errors = [err["msg"] for err in e.errors()] if isinstance(e, ValidationError) else [str(e)]
        raise ValidationFailed(errors, result.warnings) from e
    return record, result.warnings
