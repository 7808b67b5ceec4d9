"""
Daily analytics counters: per-day risk-tier counts (from chat) and per-day instrument
counts (from assessments). Days are UTC dates fixed when the event is ingested.
"""
from datetime import date, timedelta
from typing import Iterable, Mapping, Optional

from mindcare.core.escalation import utc_today
from mindcare.core.risk import RISK_TIERS, RiskTier
from mindcare.core.scoring import Instrument
from mindcare.db.kv_store import KVStore
from mindcare.schemas.analytics import DailyAssessmentCounter, DailyRiskCounter, RiskSummary

RISK_PREFIX = "analytics:risk:"
ASSESSMENT_PREFIX = "analytics:assessment:"

_TIER_KEYS = [t.value for t in RISK_TIERS]
_INSTRUMENT_KEYS = [i.value for i in Instrument]


def risk_key(day: date) -> str:
    return f"{RISK_PREFIX}{day.isoformat()}"


def assessment_key(day: date) -> str:
    return f"{ASSESSMENT_PREFIX}{day.isoformat()}"


def increment_risk(store: KVStore, day: date, tier: RiskTier) -> DailyRiskCounter:
    value = store.increment(
        risk_key(day),
        RiskTier(tier).value,
        initial={"date": day.isoformat(), "counts": {k: 0 for k in _TIER_KEYS}},
    )
    return _risk_counter(value)


def increment_assessment(store: KVStore, day: date, instrument: Instrument) -> DailyAssessmentCounter:
    value = store.increment(
        assessment_key(day),
        Instrument(instrument).value,
        initial={"date": day.isoformat(), "counts": {k: 0 for k in _INSTRUMENT_KEYS}},
    )
    return _assessment_counter(value)


def _zero_filled(counts: Optional[Mapping], keys: list[str]) -> dict[str, int]:
    counts = counts or {}
    out = {k: int(counts.get(k, 0)) for k in keys}
    # Keep anything unexpected rather than silently dropping counted events
    for k, v in counts.items():
        out.setdefault(k, int(v))
    return out


def _risk_counter(value: dict) -> DailyRiskCounter:
    return DailyRiskCounter(date=value["date"], counts=_zero_filled(value.get("counts"), _TIER_KEYS))


def _assessment_counter(value: dict) -> DailyAssessmentCounter:
    return DailyAssessmentCounter(date=value["date"], counts=_zero_filled(value.get("counts"), _INSTRUMENT_KEYS))


def _window_start(range_days: int, today: Optional[date]) -> date:
    return (today or utc_today()) - timedelta(days=max(range_days, 1) - 1)


def aggregate_risk_series(store: KVStore, range_days: int, today: Optional[date] = None) -> list[DailyRiskCounter]:
    """Stored days within the last range_days days (today included), ascending by date."""
    start = _window_start(range_days, today)
    end = today or utc_today()
    series = [_risk_counter(v) for v in store.get_by_prefix(RISK_PREFIX)]
    return sorted((c for c in series if start <= c.date <= end), key=lambda c: c.date)


def aggregate_assessment_series(
    store: KVStore, range_days: int, today: Optional[date] = None
) -> list[DailyAssessmentCounter]:
    start = _window_start(range_days, today)
    end = today or utc_today()
    series = [_assessment_counter(v) for v in store.get_by_prefix(ASSESSMENT_PREFIX)]
    return sorted((c for c in series if start <= c.date <= end), key=lambda c: c.date)


def crisis_rate(totals: Mapping[str, int]) -> float:
    grand_total = sum(totals.values())
    if grand_total == 0:
        return 0.0
    return totals.get(RiskTier.CRISIS.value, 0) / grand_total


def summarize_risk(series: Iterable[DailyRiskCounter]) -> RiskSummary:
    totals = {k: 0 for k in _TIER_KEYS}
    for day in series:
        for tier, count in day.counts.items():
            totals[tier] = totals.get(tier, 0) + count
    return RiskSummary(
        totals=totals,
        grand_total=sum(totals.values()),
        high_risk_total=totals[RiskTier.HIGH.value],
        crisis_rate=crisis_rate(totals),
    )
