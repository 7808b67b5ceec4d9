"""
Escalation rule: high and crisis tiers get an auto-scheduled counsellor follow-up.
The first counsellor in the given order is assigned (no load balancing). An empty pool
is logged and returns None; the caller decides on a fallback.
"""
import logging
import uuid
from datetime import date, datetime, timedelta, timezone
from typing import Optional, Sequence

from mindcare.config import settings
from mindcare.core.risk import RiskTier, needs_escalation
from mindcare.schemas.appointment import Appointment
from mindcare.schemas.user import Counsellor

logger = logging.getLogger(__name__)


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def maybe_escalate(
    subject_id: str,
    tier: RiskTier,
    available_counsellors: Sequence[Counsellor],
    today: Optional[date] = None,
) -> Optional[Appointment]:
    """Return an auto-scheduled Appointment for high/crisis tiers, else None. Never raises on an empty pool."""
    if not needs_escalation(tier):
        return None
    if not available_counsellors:
        logger.warning("Escalation for subject=%s tier=%s skipped: no counsellors available", subject_id, tier.value)
        return None

    counsellor = available_counsellors[0]
    day = (today or utc_today()) + timedelta(days=settings.escalation_lead_days)
    appointment = Appointment(
        id=str(uuid.uuid4()),
        subject_id=subject_id,
        counsellor_id=counsellor.id,
        date=day,
        time=settings.escalation_time,
        status="auto-scheduled",
        tier=tier,
        created_at=datetime.now(timezone.utc),
    )
    logger.info(
        "Auto-scheduled appointment %s for subject=%s with counsellor=%s on %s %s (tier=%s)",
        appointment.id, subject_id, counsellor.id, appointment.date, appointment.time, tier.value,
    )
    return appointment
