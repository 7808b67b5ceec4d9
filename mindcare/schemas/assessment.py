from datetime import datetime
from typing import Any, List, Optional

from mindcare.core.risk import RiskTier
from mindcare.core.scoring import Instrument
from mindcare.schemas.appointment import Appointment
from mindcare.schemas.base import CamelModel, FrozenRecord


class AssessmentSubmission(FrozenRecord):
    id: str
    subject_id: str
    instrument: Instrument
    item_scores: List[int]
    total_score: int
    severity_label: str
    tier: RiskTier
    submitted_at: datetime


class AssessmentRequest(CamelModel):
    # Untyped so pydantic does not coerce true or "3"; the scorer rejects them and names the item
    instrument: str
    item_scores: List[Any]


class AssessmentResponse(CamelModel):
    assessment: AssessmentSubmission
    appointment: Optional[Appointment] = None


class AssessmentHistoryResponse(CamelModel):
    assessments: List[AssessmentSubmission]
