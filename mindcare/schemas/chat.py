from datetime import datetime
from typing import List, Optional

from pydantic import Field

from mindcare.core.risk import RiskTier
from mindcare.schemas.appointment import Appointment
from mindcare.schemas.base import CamelModel, FrozenRecord


class ChatMessage(FrozenRecord):
    id: str
    author_id: str
    text: str
    is_from_user: bool
    tier: Optional[RiskTier] = None  # set on user messages only
    created_at: datetime


class ChatRequest(CamelModel):
    message: str = Field(..., min_length=1, max_length=5000)


class ChatResponse(CamelModel):
    message: ChatMessage
    reply: ChatMessage
    appointment: Optional[Appointment] = None  # set when the message triggered an auto-scheduled follow-up


class ChatHistoryResponse(CamelModel):
    messages: List[ChatMessage]
