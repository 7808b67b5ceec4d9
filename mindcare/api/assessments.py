"""
Self-assessment API (PHQ-9, GAD-7). Scores the questionnaire, stores the submission,
counts it for analytics and auto-schedules a follow-up for high and crisis results.
"""
from fastapi import APIRouter, Depends

from mindcare.api.dependencies import get_current_user, get_store
from mindcare.core.permissions import AuthenticatedUser
from mindcare.core.scoring import ANSWER_OPTIONS, INSTRUMENT_QUESTIONS
from mindcare.db.kv_store import KVStore
from mindcare.schemas.assessment import AssessmentHistoryResponse, AssessmentRequest, AssessmentResponse
from mindcare.services.pipeline import list_assessments, submit_assessment

router = APIRouter()


@router.post("", response_model=AssessmentResponse)
async def submit(
    body: AssessmentRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    store: KVStore = Depends(get_store),
):
    outcome = submit_assessment(store, user.user_id, body.instrument, body.item_scores)
    return AssessmentResponse(assessment=outcome.submission, appointment=outcome.appointment)


@router.get("", response_model=AssessmentHistoryResponse)
async def history(user: AuthenticatedUser = Depends(get_current_user), store: KVStore = Depends(get_store)):
    return AssessmentHistoryResponse(assessments=list_assessments(store, user.user_id))


@router.get("/instruments")
async def instruments():
    """Question wording and answer scale for each instrument, for rendering the forms."""
    return {
        "instruments": [
            {"name": inst.value, "questions": questions, "options": ANSWER_OPTIONS}
            for inst, questions in INSTRUMENT_QUESTIONS.items()
        ]
    }
