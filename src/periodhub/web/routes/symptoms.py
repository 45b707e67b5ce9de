"""Routes for the daily symptom journal."""

from datetime import date, datetime
from typing import Optional

from fastapi import APIRouter, Depends, Form, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import ValidationError

from ...exceptions import EntryNotFound
from ...models.journal import Flow, Mood, SymptomEntry
from ...services.analysis import AnalysisService
from ...services.storage import JournalStorage, Namespace
from ...utils.i18n import Locale, t
from ..common import get_locale, get_storage, render

router = APIRouter()

COMMON_SYMPTOMS = ["cramps", "headache", "bloating", "fatigue", "nausea", "back_pain", "mood_swings"]


def _split(value: Optional[str]) -> list[str]:
    return [part.strip() for part in (value or "").split(",") if part.strip()]


@router.get("", response_class=HTMLResponse)
async def list_entries(
    request: Request,
    loc: Locale = Depends(get_locale),
    storage: JournalStorage = Depends(get_storage),
    msg: Optional[str] = Query(default=None),
):
    """Journal entries, newest first, with the storage gauge."""
    entries = storage.list_symptom_entries()
    return render(
        request, "symptoms/list.html", loc, "/symptoms",
        title=t("nav.symptoms", loc),
        entries=list(reversed(entries)),
        summary=AnalysisService(storage).symptom_summary(entries),
        info=storage.storage_info(Namespace.SYMPTOMS),
        msg=msg,
    )


@router.get("/new", response_class=HTMLResponse)
async def new_entry_form(request: Request, loc: Locale = Depends(get_locale)):
    return render(
        request, "symptoms/form.html", loc, "/symptoms/new",
        title=t("nav.symptoms", loc),
        today=date.today().isoformat(),
        moods=list(Mood),
        flows=list(Flow),
        common_symptoms=COMMON_SYMPTOMS,
        errors=[],
        form={},
    )


@router.post("")
async def create_entry(
    request: Request,
    loc: Locale = Depends(get_locale),
    storage: JournalStorage = Depends(get_storage),
    entry_date: str = Form(...),
    pain_level: int = Form(...),
    symptoms: list[str] = Form(default=[]),
    other_symptoms: Optional[str] = Form(default=None),
    mood: str = Form(default=Mood.NEUTRAL.value),
    flow: str = Form(default=Flow.NONE.value),
    medications: Optional[str] = Form(default=None),
    notes: Optional[str] = Form(default=None),
):
    """Save a journal entry; invalid input re-renders the form."""
    form = {
        "entry_date": entry_date,
        "pain_level": pain_level,
        "symptoms": symptoms,
        "mood": mood,
        "flow": flow,
        "medications": medications or "",
        "notes": notes or "",
    }
    try:
        entry = SymptomEntry(
            entry_date=datetime.strptime(entry_date, "%Y-%m-%d").date(),
            pain_level=pain_level,
            symptoms=symptoms + _split(other_symptoms),
            mood=mood,
            flow=flow,
            medications=_split(medications),
            notes=notes or None,
        )
    except (ValueError, ValidationError) as e:
        errors = [err["msg"] for err in e.errors()] if isinstance(e, ValidationError) else [str(e)]
        return render(
            request, "symptoms/form.html", loc, "/symptoms/new",
            title=t("nav.symptoms", loc),
            today=date.today().isoformat(),
            moods=list(Mood),
            flows=list(Flow),
            common_symptoms=COMMON_SYMPTOMS,
            errors=errors,
            form=form,
            status_code=422,
        )

    storage.add_symptom_entry(entry)
    return RedirectResponse(url=f"/{loc.value}/symptoms?msg=saved", status_code=303)


@router.post("/{entry_id}/delete")
async def delete_entry(
    entry_id: str,
    loc: Locale = Depends(get_locale),
    storage: JournalStorage = Depends(get_storage),
):
    if not storage.delete_symptom_entry(entry_id):
        raise EntryNotFound(entry_id)
    return RedirectResponse(url=f"/{loc.value}/symptoms?msg=deleted", status_code=303)


@router.post("/prune")
async def prune_entries(
    loc: Locale = Depends(get_locale),
    storage: JournalStorage = Depends(get_storage),
    count: int = Form(..., ge=1),
):
    """Delete the oldest ``count`` entries."""
    storage.delete_oldest(Namespace.SYMPTOMS, count)
    return RedirectResponse(url=f"/{loc.value}/symptoms?msg=pruned", status_code=303)
