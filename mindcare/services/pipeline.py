"""
Request-scoped pipelines for chat messages and questionnaire submissions.

Chat:        classify -> store message -> escalate -> count tier -> store reply
Assessment:  score -> store submission -> escalate -> count instrument

Steps run in order within one request. Store failures propagate to the caller.
"""
import logging
import uuid
from datetime import datetime, timezone
from typing import NamedTuple, Optional, Sequence

from mindcare.core.analytics import increment_assessment, increment_risk
from mindcare.core.escalation import maybe_escalate
from mindcare.core.responses import ReplySelector
from mindcare.core.risk import RiskTier, classify
from mindcare.core.scoring import parse_instrument, score
from mindcare.db.kv_store import KVStore
from mindcare.schemas.appointment import Appointment
from mindcare.schemas.assessment import AssessmentSubmission
from mindcare.schemas.chat import ChatMessage
from mindcare.services.appointments import save_appointment
from mindcare.services.directory import list_counsellors

logger = logging.getLogger(__name__)

CHAT_PREFIX = "chat:"
ASSESSMENT_RECORD_PREFIX = "assessment:"


class ChatOutcome(NamedTuple):
    message: ChatMessage
    reply: ChatMessage
    appointment: Optional[Appointment]


class AssessmentOutcome(NamedTuple):
    submission: AssessmentSubmission
    appointment: Optional[Appointment]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _utc_day(now: datetime):
    """Calendar day the event is counted under; naive datetimes are taken as UTC."""
    if now.tzinfo is None:
        return now.date()
    return now.astimezone(timezone.utc).date()


def _chat_key(message: ChatMessage) -> str:
    # Message id keeps the user message and its reply apart when they share a millisecond
    ts_ms = int(message.created_at.timestamp() * 1000)
    return f"{CHAT_PREFIX}{message.author_id}:{ts_ms}:{message.id}"


def _escalate(store: KVStore, subject_id: str, tier: RiskTier, now: datetime) -> Optional[Appointment]:
    appointment = maybe_escalate(subject_id, tier, list_counsellors(store), today=_utc_day(now))
    if appointment:
        save_appointment(store, appointment)
    return appointment


def submit_chat_message(
    store: KVStore,
    subject_id: str,
    text: str,
    selector: ReplySelector,
    now: Optional[datetime] = None,
) -> ChatOutcome:
    now = now or _utcnow()
    tier = classify(text)
    message = ChatMessage(
        id=str(uuid.uuid4()),
        author_id=subject_id,
        text=text,
        is_from_user=True,
        tier=tier,
        created_at=now,
    )
    store.set(_chat_key(message), message.to_record())

    appointment = _escalate(store, subject_id, tier, now)
    increment_risk(store, _utc_day(now), tier)

    reply = ChatMessage(
        id=str(uuid.uuid4()),
        author_id=subject_id,
        text=selector.pick(tier),
        is_from_user=False,
        created_at=now,
    )
    store.set(_chat_key(reply), reply.to_record())
    if tier >= RiskTier.HIGH:
        logger.info("Chat message %s from subject=%s classified %s", message.id, subject_id, tier.value)
    return ChatOutcome(message, reply, appointment)


def chat_history(store: KVStore, subject_id: str) -> list[ChatMessage]:
    """Oldest first; user message precedes its reply."""
    messages = [ChatMessage.model_validate(r) for r in store.get_by_prefix(f"{CHAT_PREFIX}{subject_id}:")]
    return sorted(messages, key=lambda m: (m.created_at, not m.is_from_user))


def submit_assessment(
    store: KVStore,
    subject_id: str,
    instrument: str,
    item_scores: Sequence[int],
    now: Optional[datetime] = None,
) -> AssessmentOutcome:
    now = now or _utcnow()
    inst = parse_instrument(instrument)
    result = score(inst, item_scores)
    submission = AssessmentSubmission(
        id=str(uuid.uuid4()),
        subject_id=subject_id,
        instrument=inst,
        item_scores=list(item_scores),
        total_score=result.total,
        severity_label=result.severity_label,
        tier=result.tier,
        submitted_at=now,
    )
    store.set(f"{ASSESSMENT_RECORD_PREFIX}{subject_id}:{submission.id}", submission.to_record())

    appointment = _escalate(store, subject_id, result.tier, now)
    increment_assessment(store, _utc_day(now), inst)
    logger.info(
        "Assessment %s subject=%s %s total=%s tier=%s",
        submission.id, subject_id, inst.value, result.total, result.tier.value,
    )
    return AssessmentOutcome(submission, appointment)


def list_assessments(store: KVStore, subject_id: str) -> list[AssessmentSubmission]:
    records = store.get_by_prefix(f"{ASSESSMENT_RECORD_PREFIX}{subject_id}:")
    return sorted((AssessmentSubmission.model_validate(r) for r in records), key=lambda s: s.submitted_at)
