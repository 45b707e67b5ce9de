"""Routes for the overview dashboard."""

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse

from ...models.assessment import AssessmentKind
from ...services.analysis import AnalysisService
from ...services.storage import JournalStorage, Namespace
from ...utils.i18n import Locale, t
from ..common import get_locale, get_storage, render

router = APIRouter()


@router.get("", response_class=HTMLResponse)
async def dashboard(
    request: Request,
    loc: Locale = Depends(get_locale),
    storage: JournalStorage = Depends(get_storage),
    days: int = Query(default=90, ge=7, le=365),
):
    """Aggregates over everything stored in the journal."""
    service = AnalysisService(storage)
    pain_records = storage.list_pain_records()

    return render(
        request, "analytics.html", loc, "/analytics",
        title=t("nav.analytics", loc),
        days=days,
        pain=service.pain_analytics(pain_records),
        chart_data=service.chart_data(pain_records, days=days),
        symptoms=service.symptom_summary(storage.list_symptom_entries()),
        progress=service.progress_statistics(storage.list_progress()),
        storage_info=[storage.storage_info(ns) for ns in Namespace],
        assessment_counts={
            kind.value: len(storage.assessment_history(kind)) for kind in AssessmentKind
        },
    )
