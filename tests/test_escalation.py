"""Tests for the escalation rule."""
import logging
from datetime import date, timedelta

import pytest
from pydantic import ValidationError

from mindcare.core.escalation import maybe_escalate, utc_today
from mindcare.core.risk import RiskTier
from mindcare.schemas.user import Counsellor

POOL = [Counsellor(id="c-1", name="Dr. Rao"), Counsellor(id="c-2", name="Dr. Mehta")]
TODAY = date(2026, 3, 14)


class TestMaybeEscalate:

    @pytest.mark.parametrize("tier", [RiskTier.LOW, RiskTier.MODERATE])
    def test_no_appointment_below_high(self, tier):
        assert maybe_escalate("s-1", tier, POOL, today=TODAY) is None

    @pytest.mark.parametrize("tier", [RiskTier.HIGH, RiskTier.CRISIS])
    def test_auto_schedules_for_high_and_crisis(self, tier):
        appointment = maybe_escalate("s-1", tier, POOL, today=TODAY)

        assert appointment is not None
        assert appointment.status == "auto-scheduled"
        assert appointment.subject_id == "s-1"
        assert appointment.date == date(2026, 3, 15)
        assert appointment.time == "10:00"
        assert appointment.tier == tier
        assert appointment.id

    def test_picks_first_counsellor(self):
        appointment = maybe_escalate("s-1", RiskTier.CRISIS, POOL, today=TODAY)

        assert appointment.counsellor_id == "c-1"

    def test_month_rollover(self):
        appointment = maybe_escalate("s-1", RiskTier.HIGH, POOL, today=date(2026, 12, 31))

        assert appointment.date == date(2027, 1, 1)

    def test_empty_pool_returns_none_and_logs(self, caplog):
        with caplog.at_level(logging.WARNING, logger="mindcare.core.escalation"):
            assert maybe_escalate("s-1", RiskTier.CRISIS, [], today=TODAY) is None

        assert "no counsellors available" in caplog.text

    def test_defaults_to_utc_today(self):
        appointment = maybe_escalate("s-1", RiskTier.HIGH, POOL)

        assert appointment.date == utc_today() + timedelta(days=1)

    def test_appointment_is_immutable(self):
        appointment = maybe_escalate("s-1", RiskTier.HIGH, POOL, today=TODAY)

        with pytest.raises(ValidationError):
            appointment.status = "completed"
