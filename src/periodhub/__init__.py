"""PeriodHub - menstrual pain relief information, self-assessment and journaling."""

__version__ = "0.1.0"
