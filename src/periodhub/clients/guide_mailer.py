"""Client for the e-mail marketing service that sends downloadable guides."""

import logging
import re
from dataclasses import dataclass
from typing import Optional

import httpx

from ..exceptions import GuideDeliveryError, ValidationFailed
from ..utils.config import Settings, get_settings
from ..utils.i18n import Locale

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


@dataclass(frozen=True)
class Guide:
    id: str
    title: dict[str, str]
    description: dict[str, str]


GUIDES = [
    Guide(
        "pain-relief-checklist",
        {"en": "Period Pain Relief Checklist", "zh": "经期疼痛缓解清单"},
        {"en": "A printable one-page checklist of proven relief methods.",
         "zh": "一页可打印的有效缓解方法清单。"},
    ),
    Guide(
        "doctor-visit-prep",
        {"en": "Doctor Visit Preparation Guide", "zh": "就医准备指南"},
        {"en": "What to record and which questions to ask before your appointment.",
         "zh": "就诊前需要记录的内容和应该提出的问题。"},
    ),
    Guide(
        "workplace-support",
        {"en": "Workplace Support Letter Template", "zh": "职场支持沟通模板"},
        {"en": "A template for talking to your manager about period symptoms.",
         "zh": "与上级沟通经期症状的模板。"},
    ),
]

GUIDES_BY_ID = {g.id: g for g in GUIDES}


class GuideMailer:
    """
    Client for the send-guide endpoint of the e-mail service.

    The service base URL comes from ``email_api_url``; without it the
    client is not configured and sending fails.
    """

    ENDPOINT = "/api/email-marketing/send-guide"

    def __init__(self, settings: Optional[Settings] = None, http_client: Optional[httpx.Client] = None):
        self.settings = settings or get_settings()
        self._client = http_client

    @property
    def client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(timeout=30.0)
        return self._client

    @property
    def is_configured(self) -> bool:
        return self.settings.has_email_service

    def send_guide(self, email: str, guide_id: str, locale: Locale = Locale.ZH) -> dict:
        """Ask the service to e-mail a guide; returns the service response body."""
        email = (email or "").strip()
        errors = []
        if not EMAIL_PATTERN.match(email):
            errors.append("A valid e-mail address is required")
        if guide_id not in GUIDES_BY_ID:
            errors.append(f"Unknown guide: {guide_id}")
        if errors:
            raise ValidationFailed(errors)

        if not self.is_configured:
            raise GuideDeliveryError("E-mail service is not configured")

        url = self.settings.email_api_url.rstrip("/") + self.ENDPOINT
        try:
            response = self.client.post(
                url,
                json={"email": email, "guide": guide_id, "locale": locale.value},
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Sending guide {guide_id} failed: {e}")
            raise GuideDeliveryError("The guide could not be sent, please try again later") from e

        logger.info(f"Sent guide {guide_id}")
        try:
            return response.json()
        except ValueError:
            return {"success": True}

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            self._client.close()
            self._client = None

    def __enter__(self) -> "GuideMailer":
        return self

    def __exit__(self, *args) -> None:
        self.close()
