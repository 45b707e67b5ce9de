"""JSON API for the journal, questionnaires and e-mail guides."""

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ...clients.guide_mailer import GuideMailer
from ...exceptions import EntryNotFound, ValidationFailed
from ...models.assessment import (
    AssessmentKind,
    PHQ9Answer,
    SymptomAnswers,
    WorkplaceAnswers,
)
from ...models.journal import ProgressEntry
from ...services import care, phq9, stress, symptom
from ...services.advice import professional_advice
from ...services.analysis import AnalysisService
from ...services.storage import JournalStorage, Namespace
from ...services.validation import build_pain_record
from ...utils.i18n import parse_locale
from ..common import get_storage

router = APIRouter()


class PHQ9Request(BaseModel):
    answers: list[PHQ9Answer]
    locale: Optional[str] = None


class StressRequest(BaseModel):
    answers: list[int]
    locale: Optional[str] = None


class SymptomRequest(BaseModel):
    mode: str = "simple"
    answers: Optional[SymptomAnswers] = None
    workplace: Optional[WorkplaceAnswers] = None
    locale: Optional[str] = None


class CareRequest(BaseModel):
    pain_level: int
    symptoms: list[str] = Field(default_factory=list)
    locale: Optional[str] = None


class PruneRequest(BaseModel):
    count: int = Field(ge=1)


class GuideRequest(BaseModel):
    email: str
    guide: str
    locale: Optional[str] = None


def _dump(items: list[BaseModel]) -> list[dict]:
    return [item.model_dump(mode="json") for item in items]


# Pain records

@router.get("/pain-records")
async def list_pain_records(storage: JournalStorage = Depends(get_storage)):
    return JSONResponse(content={"success": True, "records": _dump(storage.list_pain_records())})


@router.post("/pain-records")
async def create_pain_record(
    payload: dict[str, Any] = Body(...),
    overwrite: bool = Query(default=False),
    storage: JournalStorage = Depends(get_storage),
):
    """Validate and store a pain record; duplicates on a date answer 409."""
    record, warnings = build_pain_record(payload)
    saved = storage.add_pain_record(record, overwrite=overwrite)
    return JSONResponse(
        status_code=201,
        content={"success": True, "record": saved.model_dump(mode="json"), "warnings": warnings},
    )


@router.delete("/pain-records/{record_id}")
async def delete_pain_record(record_id: str, storage: JournalStorage = Depends(get_storage)):
    if not storage.delete_pain_record(record_id):
        raise EntryNotFound(record_id)
    return JSONResponse(content={"success": True})


@router.get("/pain-records/analytics")
async def pain_analytics(storage: JournalStorage = Depends(get_storage)):
    service = AnalysisService(storage)
    records = storage.list_pain_records()
    analytics = service.pain_analytics(records)
    return JSONResponse(content={
        "success": True,
        "total_records": analytics.total_records,
        "average_pain_level": analytics.average_pain_level,
        "trend": analytics.trend,
        "pain_distribution": analytics.pain_distribution,
        "insights": analytics.insights,
        "prediction": service.predict_trend(records),
        "chart_data": service.chart_data(records),
    })


# Stress progress

@router.get("/progress")
async def list_progress(
    count: int = Query(default=10, ge=1, le=100),
    storage: JournalStorage = Depends(get_storage),
):
    return JSONResponse(content={"success": True, "entries": _dump(storage.recent_progress(count))})


@router.post("/progress")
async def create_progress(
    payload: dict[str, Any] = Body(...),
    storage: JournalStorage = Depends(get_storage),
):
    try:
        entry = ProgressEntry.model_validate(payload)
    except ValueError as e:
        errors = [err["msg"] for err in e.errors()] if hasattr(e, "errors") else [str(e)]
        raise ValidationFailed(errors) from e
    storage.add_progress_entry(entry)
    return JSONResponse(status_code=201, content={"success": True, "entry": entry.model_dump(mode="json")})


@router.delete("/progress/{entry_id}")
async def delete_progress(entry_id: str, storage: JournalStorage = Depends(get_storage)):
    if not storage.delete_progress_entry(entry_id):
        raise EntryNotFound(entry_id)
    return JSONResponse(content={"success": True})


@router.get("/progress/stats")
async def progress_stats(storage: JournalStorage = Depends(get_storage)):
    stats = AnalysisService(storage).progress_statistics(storage.list_progress())
    return JSONResponse(content={
        "success": True,
        "total_entries": stats.total_entries,
        "average_stress_level": stats.average_stress_level,
        "average_mood_rating": stats.average_mood_rating,
        "techniques_used_rate": stats.techniques_used_rate,
        "most_used_techniques": stats.most_used_techniques,
        "improvement_trend": stats.improvement_trend,
        "this_week": len(storage.progress_this_week()),
        "this_month": len(storage.progress_this_month()),
    })


# Storage

@router.get("/storage")
async def storage_status(storage: JournalStorage = Depends(get_storage)):
    infos = [storage.storage_info(ns) for ns in Namespace]
    return JSONResponse(content={
        "success": True,
        "schema_version": storage.schema_version,
        "namespaces": [
            {
                "namespace": info.namespace,
                "total": info.total,
                "capacity": info.capacity,
                "usage_percent": info.usage_percent,
                "is_near_full": info.is_near_full,
                "is_full": info.is_full,
                "estimated_bytes": info.estimated_bytes,
            }
            for info in infos
        ],
    })


@router.post("/storage/{namespace}/prune")
async def prune_namespace(
    namespace: Namespace,
    payload: PruneRequest,
    storage: JournalStorage = Depends(get_storage),
):
    """Delete the oldest entries of one namespace."""
    removed = storage.delete_oldest(namespace, payload.count)
    return JSONResponse(content={"success": True, "removed": removed})


# Questionnaires

@router.post("/assessments/phq9")
async def assess_phq9(payload: PHQ9Request, storage: JournalStorage = Depends(get_storage)):
    result = phq9.evaluate(payload.answers, parse_locale(payload.locale))
    storage.save_assessment(AssessmentKind.PHQ9, result)
    return JSONResponse(content={"success": True, "result": result.model_dump(mode="json")})


@router.post("/assessments/stress")
async def assess_stress(payload: StressRequest, storage: JournalStorage = Depends(get_storage)):
    result = stress.evaluate(payload.answers, parse_locale(payload.locale))
    storage.save_assessment(AssessmentKind.STRESS, result)
    return JSONResponse(content={"success": True, "result": result.model_dump(mode="json")})


@router.post("/assessments/symptom")
async def assess_symptom(payload: SymptomRequest, storage: JournalStorage = Depends(get_storage)):
    """Score a symptom questionnaire and attach professional advice for its impact level."""
    locale = parse_locale(payload.locale)
    result = symptom.assess(payload.mode, payload.answers, payload.workplace, locale)
    storage.save_assessment(AssessmentKind.SYMPTOM, result)

    content = {"success": True, "result": result.model_dump(mode="json")}
    if payload.mode != "workplace":
        advice = professional_advice(result.score, locale, "simplified" if payload.mode == "simple" else payload.mode)
        content["advice"] = {
            "level": advice.level,
            "label": advice.label,
            "workplace": advice.workplace,
            "health": advice.health,
            "medical": advice.medical,
        }
    return JSONResponse(content=content)


@router.get("/assessments/{kind}")
async def assessment_history(kind: AssessmentKind, storage: JournalStorage = Depends(get_storage)):
    history = storage.assessment_history(kind)
    return JSONResponse(content={"success": True, "history": _dump(history)})


@router.post("/care/assess")
async def assess_care(payload: CareRequest, storage: JournalStorage = Depends(get_storage)):
    assessment = care.comprehensive_assessment(payload.pain_level, payload.symptoms, parse_locale(payload.locale))
    storage.save_assessment(AssessmentKind.CARE, assessment)
    return JSONResponse(content={"success": True, "assessment": assessment.model_dump(mode="json")})


# Export / import

@router.get("/export")
async def export_data(storage: JournalStorage = Depends(get_storage)):
    return JSONResponse(content=storage.export_data())


@router.post("/import")
async def import_data(
    payload: dict[str, Any] = Body(...),
    replace: bool = Query(default=False),
    storage: JournalStorage = Depends(get_storage),
):
    counts = storage.import_data(payload, replace=replace)
    return JSONResponse(content={"success": True, "imported": counts})


# E-mail guides

@router.post("/email-marketing/send-guide")
async def send_guide(payload: GuideRequest):
    with GuideMailer() as mailer:
        mailer.send_guide(payload.email, payload.guide, parse_locale(payload.locale))
    return JSONResponse(content={"success": True})
