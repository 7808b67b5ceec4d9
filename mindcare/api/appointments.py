"""
Appointments API: students book, everyone lists their own (role-scoped), and the
assigned counsellor marks an appointment completed or cancelled.
"""
from fastapi import APIRouter, Depends

from mindcare.api.dependencies import get_current_user, get_store, require_role
from mindcare.core.permissions import AuthenticatedUser
from mindcare.db.kv_store import KVStore
from mindcare.schemas.appointment import Appointment, AppointmentsResponse, BookAppointmentRequest, StatusUpdateRequest
from mindcare.services.appointments import appointments_for, book_appointment, update_status

router = APIRouter()


@router.post("", response_model=Appointment)
async def book(
    body: BookAppointmentRequest,
    user: AuthenticatedUser = Depends(require_role("student")),
    store: KVStore = Depends(get_store),
):
    return book_appointment(store, user.user_id, body.counsellor_id, body.date, body.time)


@router.get("", response_model=AppointmentsResponse)
async def list_appointments(user: AuthenticatedUser = Depends(get_current_user), store: KVStore = Depends(get_store)):
    return AppointmentsResponse(appointments=appointments_for(store, user))


@router.patch("/{appointment_id}/status", response_model=Appointment)
async def set_status(
    appointment_id: str,
    body: StatusUpdateRequest,
    user: AuthenticatedUser = Depends(require_role("counsellor")),
    store: KVStore = Depends(get_store),
):
    return update_status(store, appointment_id, body.status, user.user_id)
