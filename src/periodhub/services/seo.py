"""SEO metadata: canonical URLs, hreflang alternates, JSON-LD and the sitemap."""

import json
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..utils.config import Settings, get_settings
from ..utils.i18n import Locale
from .content import ARTICLES, TOOLS, Article, Tool

DEFAULT_RATING = {"value": 4.8, "count": 1250}

# (path, change frequency, priority) for pages that are not articles or tools
STATIC_PAGES = [
    ("", "weekly", 1.0),
    ("/articles", "weekly", 0.8),
    ("/tools", "monthly", 0.8),
    ("/downloads", "monthly", 0.6),
    ("/analytics", "monthly", 0.4),
]


@dataclass
class SitemapEntry:
    loc: str
    lastmod: str
    changefreq: str
    priority: float
    alternates: dict[str, str]


class SeoService:
    """Builds page metadata from the site base URL."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    @property
    def base_url(self) -> str:
        return self.settings.base_url.rstrip("/")

    def canonical_url(self, locale: Locale, path: str = "") -> str:
        """Absolute URL of a page in a locale; ``path`` excludes the locale prefix."""
        path = path.strip("/")
        return f"{self.base_url}/{locale.value}" + (f"/{path}" if path else "")

    def hreflang_alternates(self, path: str = "") -> dict[str, str]:
        """Language alternates for a page, with Chinese as the x-default."""
        return {
            Locale.ZH.language_tag: self.canonical_url(Locale.ZH, path),
            Locale.EN.language_tag: self.canonical_url(Locale.EN, path),
            "x-default": self.canonical_url(Locale.ZH, path),
        }

    def page_metadata(self, locale: Locale, path: str, title: str, description: str) -> dict:
        return {
            "title": title,
            "description": description,
            "canonical": self.canonical_url(locale, path),
            "alternates": self.hreflang_alternates(path),
            "og_locale": locale.language_tag.replace("-", "_"),
        }

    def _organization(self) -> dict:
        return {
            "@type": "Organization",
            "name": "PeriodHub",
            "url": self.base_url,
            "logo": {
                "@type": "ImageObject",
                "url": f"{self.base_url}/icon-512.png",
                "width": 512,
                "height": 512,
            },
        }

    def _breadcrumbs(self, locale: Locale, crumbs: list[tuple[str, str]]) -> dict:
        return {
            "@type": "BreadcrumbList",
            "itemListElement": [
                {
                    "@type": "ListItem",
                    "position": i,
                    "name": name,
                    "item": self.canonical_url(locale, path),
                }
                for i, (name, path) in enumerate(crumbs, start=1)
            ],
        }

    def tool_structured_data(self, tool: Tool, locale: Locale, rating: Optional[dict] = None) -> dict:
        """schema.org graph describing an interactive tool as a free web application."""
        rating = rating or DEFAULT_RATING
        url = self.canonical_url(locale, tool.path)
        loc = locale.value
        zh = locale is Locale.ZH

        features = tool.features.get(loc) or (
            ["症状评估", "个性化建议", "健康报告"] if zh
            else ["Symptom Assessment", "Personalized Recommendations", "Health Reports"]
        )

        return {
            "@context": "https://schema.org",
            "@graph": [
                {
                    "@type": "SoftwareApplication",
                    "@id": f"{url}#application",
                    "name": tool.name[loc],
                    "description": tool.description[loc],
                    "url": url,
                    "applicationCategory": "HealthApplication",
                    "operatingSystem": "Web",
                    "inLanguage": locale.language_tag,
                    "isAccessibleForFree": True,
                    "offers": {
                        "@type": "Offer",
                        "price": "0",
                        "priceCurrency": "USD",
                        "availability": "https://schema.org/InStock",
                    },
                    "featureList": list(features),
                    "aggregateRating": {
                        "@type": "AggregateRating",
                        "ratingValue": str(rating["value"]),
                        "ratingCount": str(rating["count"]),
                        "bestRating": "5",
                        "worstRating": "1",
                    },
                    "publisher": self._organization(),
                    "about": {
                        "@type": "MedicalCondition",
                        "name": "Dysmenorrhea",
                        "alternateName": (
                            ["月经疼痛", "经期疼痛", "Dysmenorrhea"] if zh
                            else ["Menstrual Pain", "Period Pain", "痛经"]
                        ),
                        "code": {"@type": "MedicalCode", "code": "N94.6", "codingSystem": "ICD-10"},
                    },
                },
                self._breadcrumbs(locale, [
                    ("首页" if zh else "Home", ""),
                    ("互动工具" if zh else "Tools", "/tools"),
                    (tool.name[loc], tool.path),
                ]),
            ],
        }

    def article_structured_data(self, article: Article, locale: Locale) -> dict:
        loc = locale.value
        url = self.canonical_url(locale, f"/articles/{article.slug}")
        return {
            "@context": "https://schema.org",
            "@graph": [
                {
                    "@type": ["MedicalWebPage", "Article"],
                    "@id": f"{url}#article",
                    "headline": article.title[loc],
                    "description": article.summary[loc],
                    "url": url,
                    "inLanguage": locale.language_tag,
                    "datePublished": article.published,
                    "keywords": ", ".join(article.keywords),
                    "publisher": self._organization(),
                    "medicalAudience": {"@type": "PatientsAudience"},
                },
                self._breadcrumbs(locale, [
                    ("首页" if locale is Locale.ZH else "Home", ""),
                    ("文章" if locale is Locale.ZH else "Articles", "/articles"),
                    (article.title[loc], f"/articles/{article.slug}"),
                ]),
            ],
        }

    def sitemap_entries(self, today: Optional[date] = None) -> list[SitemapEntry]:
        """Every public page in both locales."""
        lastmod = (today or date.today()).isoformat()
        pages = list(STATIC_PAGES)
        pages.extend((tool.path, "monthly", 0.9) for tool in TOOLS)
        pages.extend((f"/articles/{a.slug}", "monthly", 0.7) for a in ARTICLES)

        entries = []
        for path, changefreq, priority in pages:
            alternates = self.hreflang_alternates(path)
            for locale in (Locale.ZH, Locale.EN):
                entries.append(SitemapEntry(
                    loc=self.canonical_url(locale, path),
                    lastmod=lastmod,
                    changefreq=changefreq,
                    priority=priority,
                    alternates=alternates,
                ))
        return entries

    def robots_txt(self) -> str:
        return "\n".join([
            "User-agent: *",
            "Allow: /",
            "Disallow: /api/",
            f"Sitemap: {self.base_url}/sitemap.xml",
            "",
        ])


def to_json_ld(data: dict) -> str:
    """Serialize structured data for a script tag without breaking out of it."""
    return json.dumps(data, ensure_ascii=False).replace("</", "<\\/")
