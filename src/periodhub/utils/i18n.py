"""Locale handling and the UI message catalog."""

from enum import Enum
from typing import Optional

from .config import get_settings


class Locale(str, Enum):
    """Supported site locales."""
    EN = "en"
    ZH = "zh"

    @property
    def language_tag(self) -> str:
        """BCP 47 tag used in hreflang and structured data."""
        return "en-US" if self is Locale.EN else "zh-CN"


def parse_locale(value: Optional[str]) -> Locale:
    """Parse a locale string, falling back to the configured default."""
    if value:
        try:
            return Locale(value.lower())
        except ValueError:
            pass
    try:
        return Locale(get_settings().default_locale)
    except ValueError:
        return Locale.ZH


def other_locale(locale: Locale) -> Locale:
    """The locale offered by the language switcher."""
    return Locale.ZH if locale is Locale.EN else Locale.EN


MESSAGES: dict[str, dict[str, str]] = {
    "site.name": {"en": "PeriodHub", "zh": "PeriodHub 经期健康"},
    "site.tagline": {
        "en": "Evidence-based menstrual pain relief and self-assessment tools",
        "zh": "基于循证的经期疼痛缓解与自我评估工具",
    },
    "nav.home": {"en": "Home", "zh": "首页"},
    "nav.articles": {"en": "Articles", "zh": "文章"},
    "nav.tools": {"en": "Tools", "zh": "互动工具"},
    "nav.symptoms": {"en": "Symptom Journal", "zh": "症状日记"},
    "nav.pain": {"en": "Pain Tracker", "zh": "疼痛追踪"},
    "nav.stress": {"en": "Stress Management", "zh": "压力管理"},
    "nav.phq9": {"en": "PHQ-9 Screening", "zh": "PHQ-9 抑郁筛查"},
    "nav.assessment": {"en": "Symptom Assessment", "zh": "症状评估"},
    "nav.care": {"en": "When to See a Doctor", "zh": "何时就医"},
    "nav.downloads": {"en": "Downloads", "zh": "资料下载"},
    "nav.analytics": {"en": "Dashboard", "zh": "数据面板"},
    "action.save": {"en": "Save", "zh": "保存"},
    "action.delete": {"en": "Delete", "zh": "删除"},
    "action.submit": {"en": "Submit", "zh": "提交"},
    "action.export": {"en": "Export CSV", "zh": "导出 CSV"},
    "action.prune": {"en": "Delete oldest", "zh": "删除最早的记录"},
    "flash.saved": {"en": "Entry saved.", "zh": "记录已保存。"},
    "flash.deleted": {"en": "Entry deleted.", "zh": "记录已删除。"},
    "flash.pruned": {"en": "Oldest entries deleted.", "zh": "已删除最早的记录。"},
    "flash.guide_sent": {"en": "The guide is on its way to your inbox.", "zh": "指南已发送到您的邮箱。"},
    "storage.near_full": {
        "en": "Your journal is nearly full. Consider deleting your oldest entries.",
        "zh": "您的记录空间即将用满，建议删除最早的记录。",
    },
    "storage.full": {
        "en": "Your journal is full. Delete old entries to keep recording.",
        "zh": "记录空间已满，请删除旧记录后继续记录。",
    },
    "empty.entries": {"en": "No entries yet.", "zh": "暂无记录。"},
    "disclaimer": {
        "en": "This information is for education only and is not a medical diagnosis.",
        "zh": "本内容仅供健康教育参考，不构成医疗诊断。",
    },
}


def t(key: str, locale: Locale | str) -> str:
    """Translate a message key, returning the key itself when missing."""
    loc = locale.value if isinstance(locale, Locale) else str(locale)
    entry = MESSAGES.get(key)
    if entry is None:
        return key
    return entry.get(loc) or entry.get("en") or key


def pick(texts: dict, locale: Locale | str):
    """Select the locale branch of an ``{"en": ..., "zh": ...}`` mapping."""
    loc = locale.value if isinstance(locale, Locale) else str(locale)
    return texts.get(loc, texts.get("zh"))
