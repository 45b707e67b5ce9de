"""FastAPI web application."""

from pathlib import Path

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from .. import __version__
from ..exceptions import PeriodHubError
from ..utils.config import get_settings
from ..utils.i18n import parse_locale
from ..utils.logging import setup_logging
from .errors import (
    exception_handler,
    http_exception_handler,
    periodhub_exception_handler,
    validation_exception_handler,
)
from .routes import analytics, api, assessment, care, pages, pain, phq9, seo, stress, symptoms

# Paths
WEB_DIR = Path(__file__).parent
STATIC_DIR = WEB_DIR / "static"

setup_logging(get_settings().log_level)

app = FastAPI(
    title="PeriodHub",
    description="Menstrual pain relief information, self-assessment tools and a private health journal",
    version=__version__,
)

app.add_exception_handler(PeriodHubError, periodhub_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(Exception, exception_handler)

# Mount static files
if STATIC_DIR.exists():
    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")


@app.get("/")
async def home():
    """Redirect to the default locale."""
    return RedirectResponse(url=f"/{parse_locale(None).value}", status_code=302)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok"}


# Fixed paths first so "/{locale}" does not swallow them
app.include_router(seo.router, tags=["seo"])
app.include_router(api.router, prefix="/api", tags=["api"])

app.include_router(symptoms.router, prefix="/{locale}/symptoms", tags=["symptoms"])
app.include_router(pain.router, prefix="/{locale}/pain", tags=["pain"])
app.include_router(stress.router, prefix="/{locale}/stress", tags=["stress"])
app.include_router(phq9.router, prefix="/{locale}/phq9", tags=["phq9"])
app.include_router(assessment.router, prefix="/{locale}/assessment", tags=["assessment"])
app.include_router(care.router, prefix="/{locale}/care", tags=["care"])
app.include_router(analytics.router, prefix="/{locale}/analytics", tags=["analytics"])
app.include_router(pages.router, prefix="/{locale}", tags=["pages"])
