"""Routes for content pages: home, articles, tools and downloads."""

from typing import Optional

from fastapi import APIRouter, Depends, Form, HTTPException, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from ...clients.guide_mailer import GUIDES, GuideMailer
from ...exceptions import GuideDeliveryError, ValidationFailed
from ...services.content import TOOLS, get_article, list_articles
from ...services.seo import SeoService
from ...utils.i18n import Locale, t
from ..common import get_locale, render

router = APIRouter()


@router.get("", response_class=HTMLResponse)
async def home(request: Request, loc: Locale = Depends(get_locale)):
    """Landing page with the tool directory and latest articles."""
    return render(
        request, "home.html", loc, "",
        title=t("site.name", loc),
        tools=TOOLS,
        articles=list_articles(loc)[:3],
    )


@router.get("/articles", response_class=HTMLResponse)
async def articles(
    request: Request,
    loc: Locale = Depends(get_locale),
    category: Optional[str] = Query(default=None),
):
    return render(
        request, "articles/list.html", loc, "/articles",
        title=t("nav.articles", loc),
        articles=list_articles(loc, category),
        category=category,
    )


@router.get("/articles/{slug}", response_class=HTMLResponse)
async def article_detail(request: Request, slug: str, loc: Locale = Depends(get_locale)):
    article = get_article(slug)
    if article is None:
        raise HTTPException(status_code=404, detail=f"Article not found: {slug}")

    localized = article.localized(loc)
    return render(
        request, "articles/detail.html", loc, f"/articles/{slug}",
        title=localized["title"],
        description=localized["summary"],
        structured_data=SeoService().article_structured_data(article, loc),
        article=localized,
    )


@router.get("/tools", response_class=HTMLResponse)
async def tools(request: Request, loc: Locale = Depends(get_locale)):
    return render(request, "tools.html", loc, "/tools", title=t("nav.tools", loc), tools=TOOLS)


@router.get("/downloads", response_class=HTMLResponse)
async def downloads(
    request: Request,
    loc: Locale = Depends(get_locale),
    msg: Optional[str] = Query(default=None),
):
    return render(
        request, "downloads.html", loc, "/downloads",
        title=t("nav.downloads", loc),
        guides=GUIDES,
        msg=msg,
        errors=[],
    )


@router.post("/downloads")
async def send_guide(
    request: Request,
    loc: Locale = Depends(get_locale),
    email: str = Form(...),
    guide: str = Form(...),
):
    """Send a guide by e-mail; errors are shown on the downloads page."""
    try:
        with GuideMailer() as mailer:
            mailer.send_guide(email, guide, loc)
    except ValidationFailed as e:
        errors, status_code = e.errors, e.status_code
    except GuideDeliveryError as e:
        errors, status_code = [e.message], e.status_code
    else:
        return RedirectResponse(url=f"/{loc.value}/downloads?msg=guide_sent", status_code=303)

    return render(
        request, "downloads.html", loc, "/downloads",
        title=t("nav.downloads", loc),
        guides=GUIDES,
        msg=None,
        errors=errors,
        email=email,
        status_code=status_code,
    )
