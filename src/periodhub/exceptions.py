"""Application exceptions."""

from datetime import date
from typing import Optional


class PeriodHubError(Exception):
    """Base class for errors raised by PeriodHub services."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationFailed(PeriodHubError):
    """User input was rejected."""

    status_code = 422

    def __init__(self, errors: list[str], warnings: Optional[list[str]] = None):
        super().__init__("; ".join(errors) or "Invalid input")
        self.errors = errors
        self.warnings = warnings or []


class InvalidAnswers(PeriodHubError):
    """Questionnaire answers are incomplete or out of range."""

    status_code = 422


class EntryNotFound(PeriodHubError):
    """No stored entry with the given id."""

    status_code = 404

    def __init__(self, entry_id: str):
        super().__init__(f"Entry not found: {entry_id}")
        self.entry_id = entry_id


class DuplicateEntry(PeriodHubError):
    """A record already exists for the date."""

    status_code = 409

    def __init__(self, entry_date: date):
        super().__init__(f"A record already exists for {entry_date.isoformat()}")
        self.entry_date = entry_date


class ImportFailed(PeriodHubError):
    """An import payload could not be read."""

    status_code = 400


class GuideDeliveryError(PeriodHubError):
    """The e-mail guide service failed or is not configured."""

    status_code = 502
