"""
Appointment records. Each appointment is written under three keys so both parties can
list theirs by prefix:
  appointment:<id>
  student-appointment:<subject_id>:<id>
  counsellor-appointment:<counsellor_id>:<id>
Only the status ever changes after creation; all three copies are written in one transaction.
"""
import logging
import uuid
from datetime import date, datetime, timezone

from mindcare.core.errors import ForbiddenError, InvalidInputError, NotFoundError
from mindcare.core.permissions import AuthenticatedUser
from mindcare.db.kv_store import KVStore
from mindcare.schemas.appointment import CLOSED_STATUSES, OPEN_STATUSES, Appointment
from mindcare.services.directory import get_profile

logger = logging.getLogger(__name__)

APPOINTMENT_PREFIX = "appointment:"
STUDENT_PREFIX = "student-appointment:"
COUNSELLOR_PREFIX = "counsellor-appointment:"


def _keys(appointment: Appointment) -> list[str]:
    return [
        f"{APPOINTMENT_PREFIX}{appointment.id}",
        f"{STUDENT_PREFIX}{appointment.subject_id}:{appointment.id}",
        f"{COUNSELLOR_PREFIX}{appointment.counsellor_id}:{appointment.id}",
    ]


def save_appointment(store: KVStore, appointment: Appointment) -> Appointment:
    record = appointment.to_record()
    store.set_many({key: record for key in _keys(appointment)})
    return appointment


def get_appointment(store: KVStore, appointment_id: str) -> Appointment:
    record = store.get(f"{APPOINTMENT_PREFIX}{appointment_id}")
    if not record:
        raise NotFoundError("Appointment not found")
    return Appointment.model_validate(record)


def book_appointment(store: KVStore, subject_id: str, counsellor_id: str, day: date, time: str) -> Appointment:
    """Explicit booking by a student."""
    counsellor = get_profile(store, counsellor_id)
    if not counsellor or counsellor.role != "counsellor":
        raise NotFoundError("Counsellor not found")
    appointment = Appointment(
        id=str(uuid.uuid4()),
        subject_id=subject_id,
        counsellor_id=counsellor_id,
        date=day,
        time=time,
        status="scheduled",
        created_at=datetime.now(timezone.utc),
    )
    logger.info("Booked appointment %s subject=%s counsellor=%s", appointment.id, subject_id, counsellor_id)
    return save_appointment(store, appointment)


def appointments_for(store: KVStore, user: AuthenticatedUser) -> list[Appointment]:
    """Students see their own, counsellors see assigned ones, admins see all. Ordered by date and time."""
    if user.role == "student":
        records = store.get_by_prefix(f"{STUDENT_PREFIX}{user.user_id}:")
    elif user.role == "counsellor":
        records = store.get_by_prefix(f"{COUNSELLOR_PREFIX}{user.user_id}:")
    elif user.role == "admin":
        records = store.get_by_prefix(APPOINTMENT_PREFIX)
    else:
        records = []
    appointments = [Appointment.model_validate(r) for r in records]
    return sorted(appointments, key=lambda a: (a.date, a.time, a.created_at))


def count_appointments(store: KVStore) -> int:
    return store.count_by_prefix(APPOINTMENT_PREFIX)


def update_status(store: KVStore, appointment_id: str, new_status: str, actor_id: str) -> Appointment:
    """Assigned counsellor closes an open appointment as completed or cancelled."""
    appointment = get_appointment(store, appointment_id)
    if appointment.counsellor_id != actor_id:
        raise ForbiddenError("Only the assigned counsellor can update this appointment")
    if new_status not in CLOSED_STATUSES:
        raise InvalidInputError(f"Status must be one of: {', '.join(CLOSED_STATUSES)}")
    if appointment.status not in OPEN_STATUSES:
        raise InvalidInputError(f"Appointment is already {appointment.status}")

    updated = appointment.model_copy(update={"status": new_status})
    logger.info("Appointment %s: %s -> %s by %s", appointment_id, appointment.status, new_status, actor_id)
    return save_appointment(store, updated)
