"""Routes for search engines: sitemap and robots.txt."""

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

from ...services.seo import SeoService
from ..common import templates

router = APIRouter()


@router.get("/sitemap.xml")
async def sitemap(request: Request):
    """Every public page in both locales with hreflang alternates."""
    return templates.TemplateResponse(
        request,
        "sitemap.xml",
        {"entries": SeoService().sitemap_entries()},
        media_type="application/xml",
    )


@router.get("/robots.txt", response_class=PlainTextResponse)
async def robots():
    return SeoService().robots_txt()
