"""Business logic services."""

from .analysis import AnalysisService
from .seo import SeoService
from .storage import JournalStorage, Namespace
from .validation import PainRecordValidator

__all__ = [
    "JournalStorage",
    "Namespace",
    "AnalysisService",
    "PainRecordValidator",
    "SeoService",
]
