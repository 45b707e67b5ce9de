"""API clients for external services."""

from .guide_mailer import GUIDES, GuideMailer

__all__ = ["GuideMailer", "GUIDES"]
