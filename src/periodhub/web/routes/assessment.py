"""Routes for the symptom impact assessment."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import HTMLResponse
from pydantic import ValidationError

from ...exceptions import InvalidAnswers
from ...models.assessment import AssessmentKind, SymptomAnswers, WorkplaceAnswers
from ...services import symptom
from ...services.advice import professional_advice
from ...services.storage import JournalStorage
from ...utils.i18n import Locale, t
from ..common import get_locale, get_storage, render

router = APIRouter()

LIST_FIELDS = ("accompanying_symptoms", "pain_location", "medical_history", "lifestyle_factors")
ADVICE_MODES = {"simple": "simplified", "detailed": "detailed", "medical": "medical"}


def answers_from_form(form, mode: str) -> tuple[Optional[SymptomAnswers], Optional[WorkplaceAnswers]]:
    """Questionnaire answers from submitted form fields, for the parts ``mode`` asks."""
    answers = workplace = None
    try:
        if mode != "workplace":
            values = {}
            for name in SymptomAnswers.model_fields:
                if name in LIST_FIELDS:
                    values[name] = [v for v in form.getlist(name) if v]
                elif form.get(name):
                    values[name] = form.get(name)
            answers = SymptomAnswers(**values)
        if mode in ("workplace", "medical"):
            workplace = WorkplaceAnswers(**{name: form.get(name) for name in WorkplaceAnswers.model_fields if form.get(name)})
    except ValidationError as e:
        fields = sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})
        raise InvalidAnswers(f"Missing or unknown answers: {', '.join(fields)}") from e
    return answers, workplace


@router.get("", response_class=HTMLResponse)
async def assessment_form(
    request: Request,
    loc: Locale = Depends(get_locale),
    mode: str = Query(default="simple"),
):
    if mode not in symptom.MODES:
        raise HTTPException(status_code=404, detail=f"Unknown assessment mode: {mode}")
    return render(
        request, "assessment/form.html", loc, "/assessment",
        title=t("nav.assessment", loc),
        mode=mode,
        modes=symptom.MODES,
        labels=symptom.option_labels(loc),
        symptoms=symptom.ACCOMPANYING_SYMPTOMS,
        locations=symptom.PAIN_LOCATIONS,
        history=symptom.MEDICAL_HISTORY,
        lifestyle=symptom.LIFESTYLE_FACTORS,
        detailed=symptom.DETAILED_CHOICES,
        workplace=symptom.WORKPLACE_CHOICES,
    )


@router.post("", response_class=HTMLResponse)
async def assessment_submit(
    request: Request,
    loc: Locale = Depends(get_locale),
    storage: JournalStorage = Depends(get_storage),
    mode: str = Query(default="simple"),
):
    """Score the questionnaire and show recommendations with professional advice."""
    form = await request.form()
    answers, workplace = answers_from_form(form, mode)
    result = symptom.assess(mode, answers, workplace, loc)
    storage.save_assessment(AssessmentKind.SYMPTOM, result)

    advice = None
    if mode in ADVICE_MODES:
        advice = professional_advice(result.score, loc, ADVICE_MODES[mode])

    return render(
        request, "assessment/result.html", loc, "/assessment",
        title=t("nav.assessment", loc),
        mode=mode,
        result=result,
        advice=advice,
    )
