"""Routes for the pain tracker."""

from datetime import date, datetime
from typing import Optional

from fastapi import APIRouter, Depends, Form, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from ...exceptions import DuplicateEntry, EntryNotFound, ValidationFailed
from ...models.pain import MenstrualStatus, PainLocation, PainSymptom, PainType
from ...services.analysis import AnalysisService
from ...services.export import export_csv
from ...services.storage import JournalStorage, Namespace
from ...services.validation import build_pain_record
from ...utils.i18n import Locale, t
from ..common import get_locale, get_storage, render

router = APIRouter()


def _form_options() -> dict:
    return {
        "pain_types": list(PainType),
        "pain_locations": list(PainLocation),
        "pain_symptoms": list(PainSymptom),
        "menstrual_statuses": list(MenstrualStatus),
    }


def _render_form(request: Request, loc: Locale, form: dict, errors: list[str], warnings: list[str], status_code=200):
    return render(
        request, "pain/form.html", loc, "/pain/new",
        title=t("nav.pain", loc),
        form=form,
        errors=errors,
        warnings=warnings,
        status_code=status_code,
        **_form_options(),
    )


@router.get("", response_class=HTMLResponse)
async def list_records(
    request: Request,
    loc: Locale = Depends(get_locale),
    storage: JournalStorage = Depends(get_storage),
    msg: Optional[str] = Query(default=None),
):
    records = sorted(storage.list_pain_records(), key=lambda r: r.recorded_at, reverse=True)
    return render(
        request, "pain/list.html", loc, "/pain",
        title=t("nav.pain", loc),
        records=records,
        info=storage.storage_info(Namespace.PAIN),
        msg=msg,
    )


@router.get("/new", response_class=HTMLResponse)
async def new_record_form(request: Request, loc: Locale = Depends(get_locale)):
    now = datetime.now()
    form = {"entry_date": now.date().isoformat(), "entry_time": now.strftime("%H:%M")}
    return _render_form(request, loc, form, [], [])


@router.post("")
async def create_record(
    request: Request,
    loc: Locale = Depends(get_locale),
    storage: JournalStorage = Depends(get_storage),
    entry_date: str = Form(...),
    entry_time: str = Form(...),
    pain_level: str = Form(...),
    duration_minutes: Optional[str] = Form(default=None),
    pain_types: list[str] = Form(default=[]),
    locations: list[str] = Form(default=[]),
    symptoms: list[str] = Form(default=[]),
    menstrual_status: str = Form(default=MenstrualStatus.DAY_1.value),
    medication_name: Optional[str] = Form(default=None),
    medication_dosage: Optional[str] = Form(default=None),
    medication_timing: Optional[str] = Form(default=None),
    effectiveness: Optional[str] = Form(default=None),
    lifestyle_factors: Optional[str] = Form(default=None),
    notes: Optional[str] = Form(default=None),
    overwrite: bool = Form(default=False),
):
    """Validate and save a record; one record per date unless overwriting."""
    medications = []
    if medication_name and medication_name.strip():
        medications.append({
            "name": medication_name.strip(),
            "dosage": medication_dosage or None,
            "timing": medication_timing or None,
        })

    form = {
        "entry_date": entry_date,
        "entry_time": entry_time,
        "pain_level": pain_level,
        "duration_minutes": duration_minutes,
        "pain_types": pain_types,
        "locations": locations,
        "symptoms": symptoms,
        "menstrual_status": menstrual_status,
        "medications": medications,
        "effectiveness": effectiveness,
        "lifestyle_factors": [f.strip() for f in (lifestyle_factors or "").split(",") if f.strip()],
        "notes": notes,
    }

    try:
        record, _ = build_pain_record(form)
        storage.add_pain_record(record, overwrite=overwrite)
    except ValidationFailed as e:
        return _render_form(request, loc, form, e.errors, e.warnings, status_code=422)
    except DuplicateEntry as e:
        form["duplicate"] = True
        return _render_form(request, loc, form, [e.message], [], status_code=409)

    return RedirectResponse(url=f"/{loc.value}/pain?msg=saved", status_code=303)


@router.post("/{record_id}/delete")
async def delete_record(
    record_id: str,
    loc: Locale = Depends(get_locale),
    storage: JournalStorage = Depends(get_storage),
):
    if not storage.delete_pain_record(record_id):
        raise EntryNotFound(record_id)
    return RedirectResponse(url=f"/{loc.value}/pain?msg=deleted", status_code=303)


@router.post("/prune")
async def prune_records(
    loc: Locale = Depends(get_locale),
    storage: JournalStorage = Depends(get_storage),
    count: int = Form(..., ge=1),
):
    storage.delete_oldest(Namespace.PAIN, count)
    return RedirectResponse(url=f"/{loc.value}/pain?msg=pruned", status_code=303)


@router.get("/analytics", response_class=HTMLResponse)
async def pain_analytics(
    request: Request,
    loc: Locale = Depends(get_locale),
    storage: JournalStorage = Depends(get_storage),
):
    """Aggregates, patterns and predictions over all stored records."""
    service = AnalysisService(storage)
    records = storage.list_pain_records()
    return render(
        request, "pain/analytics.html", loc, "/pain/analytics",
        title=t("nav.pain", loc),
        analytics=service.pain_analytics(records),
        patterns=service.find_patterns(records),
        prediction=service.predict_trend(records),
        correlations=service.analyze_correlations(records),
        chart_data=service.chart_data(records),
    )


@router.get("/export.csv")
async def export_records(
    loc: Locale = Depends(get_locale),
    storage: JournalStorage = Depends(get_storage),
):
    """Download every record as CSV."""
    filename = f"pain-records-{date.today().isoformat()}.csv"
    return Response(
        content=export_csv(storage.list_pain_records()),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
