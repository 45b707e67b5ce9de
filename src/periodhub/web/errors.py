"""Exception handlers for the web app."""

import logging

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..exceptions import PeriodHubError, ValidationFailed
from ..utils.i18n import parse_locale
from .common import templates

logger = logging.getLogger(__name__)


def _wants_json(request: Request) -> bool:
    return request.url.path.startswith("/api/") or "application/json" in request.headers.get("accept", "")


def _error_page(request: Request, status_code: int, message: str, errors: list | None = None):
    segment = request.url.path.strip("/").split("/")[0]
    locale = parse_locale(segment)
    return templates.TemplateResponse(
        request,
        "error.html",
        {
            "locale": locale,
            "lang": locale.value,
            "meta": {"title": str(status_code), "description": message, "alternates": {}},
            "status_code": status_code,
            "message": message,
            "errors": errors or [],
        },
        status_code=status_code,
    )


async def periodhub_exception_handler(request: Request, exc: PeriodHubError):
    """Application errors keep their own status code."""
    logger.warning(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
    errors = exc.errors if isinstance(exc, ValidationFailed) else []

    if _wants_json(request):
        content = {"success": False, "error": exc.message}
        if errors:
            content["errors"] = errors
        if isinstance(exc, ValidationFailed) and exc.warnings:
            content["warnings"] = exc.warnings
        return JSONResponse(status_code=exc.status_code, content=content)
    return _error_page(request, exc.status_code, exc.message, errors)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Request validation failed: {exc.errors()}")
    if not _wants_json(request):
        errors = [
            f"{'.'.join(str(part) for part in err['loc'] if part != 'body')}: {err['msg']}"
            for err in exc.errors()
        ]
        return _error_page(request, 422, "Request validation failed", errors)
    return JSONResponse(
        status_code=422,
        content={
            "success": False,
            "error": "Request validation failed",
            "detail": jsonable_encoder(exc.errors()),
        },
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if _wants_json(request):
        return JSONResponse(status_code=exc.status_code, content={"success": False, "error": exc.detail})
    if exc.status_code == 404:
        return _error_page(request, 404, str(exc.detail))
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code)


async def exception_handler(request: Request, exc: Exception):
    """Last-resort handler for anything unexpected."""
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"success": False, "error": "Internal server error"},
    )
