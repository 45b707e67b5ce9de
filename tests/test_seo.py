"""Tests for SEO metadata and site content."""

from datetime import date

import pytest

from periodhub.services.content import ARTICLES, TOOLS, get_article, get_tool, list_articles
from periodhub.services.seo import STATIC_PAGES, SeoService, to_json_ld
from periodhub.utils.config import Settings
from periodhub.utils.i18n import Locale


@pytest.fixture
def seo(tmp_path):
    return SeoService(Settings(data_dir=tmp_path, base_url="https://example.org/", _env_file=None))


class TestUrls:
    """Tests for canonical URLs and alternates."""

    def test_canonical(self, seo):
        """Test locale-prefixed canonical URLs."""
        assert seo.canonical_url(Locale.EN) == "https://example.org/en"
        assert seo.canonical_url(Locale.ZH, "/tools") == "https://example.org/zh/tools"
        assert seo.canonical_url(Locale.EN, "articles/x/") == "https://example.org/en/articles/x"

    def test_hreflang(self, seo):
        """Test that Chinese is the x-default."""
        alternates = seo.hreflang_alternates("/pain")
        assert alternates == {
            "zh-CN": "https://example.org/zh/pain",
            "en-US": "https://example.org/en/pain",
            "x-default": "https://example.org/zh/pain",
        }

    def test_page_metadata(self, seo):
        """Test metadata passed to templates."""
        meta = seo.page_metadata(Locale.EN, "/tools", "Tools", "All tools")
        assert meta["canonical"] == "https://example.org/en/tools"
        assert meta["og_locale"] == "en_US"


class TestStructuredData:
    """Tests for JSON-LD graphs."""

    def test_tool(self, seo):
        """Test the software application graph for a tool."""
        tool = get_tool("pain-tracker")
        data = seo.tool_structured_data(tool, Locale.ZH)
        app, breadcrumbs = data["@graph"]

        assert app["@type"] == "SoftwareApplication"
        assert app["name"] == "疼痛追踪器"
        assert app["url"] == "https://example.org/zh/pain"
        assert app["offers"]["price"] == "0"
        assert app["aggregateRating"]["ratingValue"] == "4.8"
        assert app["about"]["code"]["code"] == "N94.6"
        assert [i["position"] for i in breadcrumbs["itemListElement"]] == [1, 2, 3]
        assert breadcrumbs["itemListElement"][-1]["item"] == app["url"]

    def test_tool_custom_rating(self, seo):
        """Test overriding the rating."""
        data = seo.tool_structured_data(TOOLS[0], Locale.EN, rating={"value": 4.5, "count": 10})
        assert data["@graph"][0]["aggregateRating"]["ratingCount"] == "10"

    def test_article(self, seo):
        """Test the article graph."""
        article = ARTICLES[0]
        data = seo.article_structured_data(article, Locale.EN)
        page = data["@graph"][0]
        assert page["headline"] == article.title["en"]
        assert page["inLanguage"] == "en-US"
        assert page["url"].endswith(f"/en/articles/{article.slug}")

    def test_json_ld_escapes_script_end(self):
        """Test that closing tags cannot end the script element."""
        text = to_json_ld({"name": "</script><b>"})
        assert "</script>" not in text
        assert "痛经" in to_json_ld({"name": "痛经"})


class TestSitemap:
    """Tests for the sitemap and robots.txt."""

    def test_every_page_in_both_locales(self, seo):
        """Test sitemap coverage."""
        entries = seo.sitemap_entries(today=date(2024, 5, 1))
        pages = len(STATIC_PAGES) + len(TOOLS) + len(ARTICLES)
        assert len(entries) == pages * 2
        assert {e.lastmod for e in entries} == {"2024-05-01"}
        assert "https://example.org/en/tools" in {e.loc for e in entries}

    def test_robots(self, seo):
        """Test robots.txt content."""
        robots = seo.robots_txt()
        assert "Disallow: /api/" in robots
        assert "Sitemap: https://example.org/sitemap.xml" in robots


class TestContent:
    """Tests for the article and tool directory."""

    def test_lookup(self):
        """Test lookup by slug."""
        assert get_article(ARTICLES[0].slug) is ARTICLES[0]
        assert get_article("missing") is None
        assert get_tool("phq9").path == "/phq9"

    def test_list_newest_first(self):
        """Test article ordering and localization."""
        cards = list_articles(Locale.ZH)
        assert [c["published"] for c in cards] == sorted((c["published"] for c in cards), reverse=True)
        assert cards[0]["title"] == get_article(cards[0]["slug"]).title["zh"]

    def test_filter_by_category(self):
        """Test category filtering."""
        cards = list_articles(Locale.EN, category="pain-management")
        assert cards
        assert all(c["category"] == "pain-management" for c in cards)

    def test_both_locales_complete(self):
        """Test that every article has both languages."""
        for article in ARTICLES:
            assert set(article.title) == {"en", "zh"}
            assert article.body["en"] and article.body["zh"]
