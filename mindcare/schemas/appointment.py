from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import Field

from mindcare.core.risk import RiskTier
from mindcare.schemas.base import CamelModel, FrozenRecord

AppointmentStatus = Literal["scheduled", "auto-scheduled", "completed", "cancelled"]

OPEN_STATUSES = ("scheduled", "auto-scheduled")
CLOSED_STATUSES = ("completed", "cancelled")


class Appointment(FrozenRecord):
    id: str
    subject_id: str
    counsellor_id: str
    date: date
    time: str
    status: AppointmentStatus
    tier: Optional[RiskTier] = None  # the tier that caused an auto-scheduled booking
    created_at: datetime


class BookAppointmentRequest(CamelModel):
    counsellor_id: str = Field(..., min_length=1)
    date: date
    time: str = Field(..., pattern=r"^([01]\d|2[0-3]):[0-5]\d$")


class StatusUpdateRequest(CamelModel):
    status: Literal["completed", "cancelled"]


class AppointmentsResponse(CamelModel):
    appointments: List[Appointment]
