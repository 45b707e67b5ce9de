"""Routes for the PHQ-9 screening."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from ...models.assessment import AssessmentKind
from ...services import phq9
from ...services.storage import JournalStorage
from ...utils.i18n import Locale, t
from ..common import get_locale, get_storage, render

router = APIRouter()


@router.get("", response_class=HTMLResponse)
async def phq9_form(
    request: Request,
    loc: Locale = Depends(get_locale),
    storage: JournalStorage = Depends(get_storage),
):
    return render(
        request, "phq9/form.html", loc, "/phq9",
        title=t("nav.phq9", loc),
        questions=phq9.QUESTIONS,
        options=phq9.OPTIONS,
        history=storage.assessment_history(AssessmentKind.PHQ9),
    )


@router.post("", response_class=HTMLResponse)
async def phq9_submit(
    request: Request,
    loc: Locale = Depends(get_locale),
    storage: JournalStorage = Depends(get_storage),
):
    """Score the submitted answers and keep the result in the history."""
    form = await request.form()
    result = phq9.evaluate(phq9.parse_answers(form), loc)
    storage.save_assessment(AssessmentKind.PHQ9, result)
    return render(
        request, "phq9/result.html", loc, "/phq9",
        title=t("nav.phq9", loc),
        result=result,
    )
