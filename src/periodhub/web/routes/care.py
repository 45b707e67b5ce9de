"""Routes for the when-to-see-a-doctor guide."""

from fastapi import APIRouter, Depends, Form, Query, Request
from fastapi.responses import HTMLResponse

from ...exceptions import InvalidAnswers
from ...models.assessment import AssessmentKind, CareAssessment
from ...services import care
from ...services.storage import JournalStorage
from ...utils.i18n import Locale, t
from ..common import get_locale, get_storage, render

router = APIRouter()


def _history(storage: JournalStorage) -> list[CareAssessment]:
    return [
        CareAssessment.model_validate(stored.result)
        for stored in storage.assessment_history(AssessmentKind.CARE)
    ]


def parse_tree_answers(value: str) -> list[bool]:
    """``"yn"`` style answer strings; anything but y/n is rejected."""
    answers = []
    for char in value.lower():
        if char not in "yn":
            raise InvalidAnswers(f"Invalid decision tree answer: {char}")
        answers.append(char == "y")
    return answers


@router.get("", response_class=HTMLResponse)
async def care_guide(
    request: Request,
    loc: Locale = Depends(get_locale),
    storage: JournalStorage = Depends(get_storage),
):
    return render(
        request, "care/index.html", loc, "/care",
        title=t("nav.care", loc),
        red_flags=care.RED_FLAGS,
        stats=care.assessment_statistics(_history(storage)),
    )


@router.post("", response_class=HTMLResponse)
async def care_assess(
    request: Request,
    loc: Locale = Depends(get_locale),
    storage: JournalStorage = Depends(get_storage),
    pain_level: int = Form(...),
    symptoms: list[str] = Form(default=[]),
):
    """Combine the pain scale with the red-flag checklist."""
    assessment = care.comprehensive_assessment(pain_level, symptoms, loc)
    storage.save_assessment(AssessmentKind.CARE, assessment)
    checklist = care.analyze_symptoms(symptoms, loc)
    return render(
        request, "care/result.html", loc, "/care",
        title=t("nav.care", loc),
        assessment=assessment,
        checklist=checklist,
    )


@router.get("/tree", response_class=HTMLResponse)
async def decision_tree(
    request: Request,
    loc: Locale = Depends(get_locale),
    answers: str = Query(default=""),
):
    """Step through the decision tree one yes/no answer at a time."""
    node, visited = care.walk_tree(parse_tree_answers(answers))
    return render(
        request, "care/tree.html", loc, "/care/tree",
        title=t("nav.care", loc),
        node=node,
        visited=visited,
        answers=answers.lower(),
        lang_index=0 if loc is Locale.EN else 1,
    )
