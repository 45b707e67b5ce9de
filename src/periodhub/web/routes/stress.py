"""Routes for the stress assessment and the stress-management progress log."""

from datetime import date, datetime
from typing import Optional

from fastapi import APIRouter, Depends, Form, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import ValidationError

from ...exceptions import EntryNotFound, InvalidAnswers
from ...models.assessment import AssessmentKind
from ...models.journal import ProgressEntry, Technique
from ...services import stress
from ...services.analysis import AnalysisService
from ...services.storage import JournalStorage, Namespace
from ...utils.i18n import Locale, t
from ..common import get_locale, get_storage, render

router = APIRouter()


def parse_stress_answers(raw) -> list[int]:
    """Answers from ``q1``..``q10`` form fields, in question order."""
    answers = []
    for question in stress.QUESTIONS:
        value = raw.get(question.id)
        if value in (None, ""):
            raise InvalidAnswers(f"Question {question.id} was not answered")
        try:
            answers.append(int(value))
        except ValueError as e:
            raise InvalidAnswers(f"Answer to {question.id} must be a number") from e
    return answers


@router.get("", response_class=HTMLResponse)
async def assessment_form(request: Request, loc: Locale = Depends(get_locale)):
    return render(
        request, "stress/assessment.html", loc, "/stress",
        title=t("nav.stress", loc),
        questions=stress.QUESTIONS,
        options=stress.OPTIONS,
    )


@router.post("", response_class=HTMLResponse)
async def submit_assessment(
    request: Request,
    loc: Locale = Depends(get_locale),
    storage: JournalStorage = Depends(get_storage),
):
    form = await request.form()
    result = stress.evaluate(parse_stress_answers(form), loc)
    storage.save_assessment(AssessmentKind.STRESS, result)
    return render(
        request, "stress/result.html", loc, "/stress",
        title=t("nav.stress", loc),
        result=result,
    )


@router.get("/progress", response_class=HTMLResponse)
async def progress_log(
    request: Request,
    loc: Locale = Depends(get_locale),
    storage: JournalStorage = Depends(get_storage),
    msg: Optional[str] = Query(default=None),
):
    """Recent progress entries with statistics and the entry form."""
    entries = storage.list_progress()
    return render(
        request, "stress/progress.html", loc, "/stress/progress",
        title=t("nav.stress", loc),
        entries=storage.recent_progress(20),
        stats=AnalysisService(storage).progress_statistics(entries),
        this_week=len(storage.progress_this_week()),
        info=storage.storage_info(Namespace.PROGRESS),
        techniques=list(Technique),
        today=date.today().isoformat(),
        errors=[],
        msg=msg,
    )


@router.post("/progress")
async def add_progress(
    request: Request,
    loc: Locale = Depends(get_locale),
    storage: JournalStorage = Depends(get_storage),
    entry_date: str = Form(...),
    stress_level: int = Form(...),
    mood_rating: int = Form(...),
    techniques: list[str] = Form(default=[]),
    notes: Optional[str] = Form(default=None),
):
    try:
        entry = ProgressEntry(
            entry_date=datetime.strptime(entry_date, "%Y-%m-%d").date(),
            stress_level=stress_level,
            mood_rating=mood_rating,
            techniques=techniques,
            notes=notes or None,
        )
    except ValueError as e:
        errors = [err["msg"] for err in e.errors()] if isinstance(e, ValidationError) else [str(e)]
        return render(
            request, "stress/progress.html", loc, "/stress/progress",
            title=t("nav.stress", loc),
            entries=storage.recent_progress(20),
            stats=AnalysisService(storage).progress_statistics(storage.list_progress()),
            this_week=len(storage.progress_this_week()),
            info=storage.storage_info(Namespace.PROGRESS),
            techniques=list(Technique),
            today=date.today().isoformat(),
            errors=errors,
            msg=None,
            status_code=422,
        )

    storage.add_progress_entry(entry)
    return RedirectResponse(url=f"/{loc.value}/stress/progress?msg=saved", status_code=303)


@router.post("/progress/{entry_id}/delete")
async def delete_progress(
    entry_id: str,
    loc: Locale = Depends(get_locale),
    storage: JournalStorage = Depends(get_storage),
):
    if not storage.delete_progress_entry(entry_id):
        raise EntryNotFound(entry_id)
    return RedirectResponse(url=f"/{loc.value}/stress/progress?msg=deleted", status_code=303)


@router.post("/progress/prune")
async def prune_progress(
    loc: Locale = Depends(get_locale),
    storage: JournalStorage = Depends(get_storage),
    count: int = Form(..., ge=1),
):
    storage.delete_oldest(Namespace.PROGRESS, count)
    return RedirectResponse(url=f"/{loc.value}/stress/progress?msg=pruned", status_code=303)
