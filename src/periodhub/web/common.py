"""Shared pieces of the page routers: templates, locale and storage dependencies."""

from pathlib import Path
from typing import Iterator, Optional

from fastapi import HTTPException, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from ..services.seo import SeoService, to_json_ld
from ..services.storage import JournalStorage
from ..utils.i18n import Locale, other_locale, pick, t

templates = Jinja2Templates(directory=Path(__file__).parent / "templates")
templates.env.globals.update(t=t, pick=pick, to_json_ld=to_json_ld)


def get_locale(locale: str) -> Locale:
    """Resolve the ``{locale}`` path segment; unknown locales are 404s."""
    try:
        return Locale(locale)
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Unknown locale: {locale}")


def get_storage() -> Iterator[JournalStorage]:
    """Storage for one request, closed afterwards."""
    with JournalStorage() as storage:
        yield storage


def render(
    request: Request,
    template: str,
    locale: Locale,
    path: str,
    title: str,
    description: str = "",
    structured_data: Optional[dict] = None,
    status_code: int = 200,
    **context,
) -> HTMLResponse:
    """Render a localized page with its canonical, hreflang and JSON-LD metadata."""
    seo = SeoService()
    meta = seo.page_metadata(locale, path, title, description or t("site.tagline", locale))
    return templates.TemplateResponse(
        request,
        template,
        {
            "locale": locale,
            "lang": locale.value,
            "switch_locale": other_locale(locale),
            "path": path,
            "meta": meta,
            "structured_data": structured_data,
            **context,
        },
        status_code=status_code,
    )
