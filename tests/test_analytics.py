"""Tests for the daily analytics counters and the risk summary."""
from datetime import date, timedelta

import pytest

from mindcare.core.analytics import (
    aggregate_assessment_series,
    aggregate_risk_series,
    crisis_rate,
    increment_assessment,
    increment_risk,
    summarize_risk,
)
from mindcare.core.risk import RiskTier
from mindcare.core.scoring import Instrument

DAY = date(2026, 5, 20)


class TestIncrementRisk:

    def test_monotonic_on_same_day(self, store):
        for _ in range(4):
            counter = increment_risk(store, DAY, RiskTier.HIGH)

        assert counter.date == DAY
        assert counter.counts == {"low": 0, "moderate": 0, "high": 4, "crisis": 0}

    def test_days_are_separate(self, store):
        increment_risk(store, DAY, RiskTier.CRISIS)
        increment_risk(store, DAY + timedelta(days=1), RiskTier.LOW)

        series = aggregate_risk_series(store, 7, today=DAY + timedelta(days=1))

        assert [c.date for c in series] == [DAY, DAY + timedelta(days=1)]
        assert series[0].counts["crisis"] == 1
        assert series[1].counts["low"] == 1

    def test_keyed_under_analytics_risk_prefix(self, store):
        increment_risk(store, DAY, RiskTier.MODERATE)

        assert store.get("analytics:risk:2026-05-20")["counts"]["moderate"] == 1


class TestIncrementAssessment:

    def test_counts_per_instrument(self, store):
        increment_assessment(store, DAY, Instrument.PHQ9)
        increment_assessment(store, DAY, Instrument.PHQ9)
        counter = increment_assessment(store, DAY, Instrument.GAD7)

        assert counter.counts == {"PHQ-9": 2, "GAD-7": 1}
        assert store.get("analytics:assessment:2026-05-20")["counts"] == {"PHQ-9": 2, "GAD-7": 1}


class TestSeries:

    def test_sorted_ascending_regardless_of_insert_order(self, store):
        for offset in (3, 0, 5, 1):
            increment_risk(store, DAY - timedelta(days=offset), RiskTier.LOW)

        series = aggregate_risk_series(store, 7, today=DAY)

        assert [c.date for c in series] == sorted(c.date for c in series)
        assert len(series) == 4

    def test_window_excludes_older_days(self, store):
        increment_risk(store, DAY - timedelta(days=7), RiskTier.HIGH)
        increment_risk(store, DAY - timedelta(days=6), RiskTier.HIGH)

        series = aggregate_risk_series(store, 7, today=DAY)

        assert [c.date for c in series] == [DAY - timedelta(days=6)]

    def test_empty_store(self, store):
        assert aggregate_risk_series(store, 7, today=DAY) == []
        assert aggregate_assessment_series(store, 7, today=DAY) == []

    def test_assessment_series_zero_fills(self, store):
        increment_assessment(store, DAY, Instrument.GAD7)

        series = aggregate_assessment_series(store, 1, today=DAY)

        assert series[0].counts == {"PHQ-9": 0, "GAD-7": 1}


class TestCrisisRate:

    def test_zero_total_is_zero(self):
        assert crisis_rate({}) == 0.0
        assert crisis_rate({"low": 0, "crisis": 0}) == 0.0

    def test_quarter(self):
        assert crisis_rate({"low": 3, "crisis": 1}) == pytest.approx(0.25)

    def test_accepts_tier_keys(self):
        assert crisis_rate({RiskTier.LOW: 1, RiskTier.CRISIS: 1}) == pytest.approx(0.5)


class TestSummarize:

    def test_sums_across_days(self, store):
        increment_risk(store, DAY - timedelta(days=1), RiskTier.LOW)
        increment_risk(store, DAY - timedelta(days=1), RiskTier.LOW)
        increment_risk(store, DAY, RiskTier.LOW)
        increment_risk(store, DAY, RiskTier.CRISIS)
        increment_risk(store, DAY, RiskTier.HIGH)

        summary = summarize_risk(aggregate_risk_series(store, 7, today=DAY))

        assert summary.totals == {"low": 3, "moderate": 0, "high": 1, "crisis": 1}
        assert summary.grand_total == 5
        assert summary.high_risk_total == 1
        assert summary.crisis_rate == pytest.approx(0.2)

    def test_empty_series(self):
        summary = summarize_risk([])

        assert summary.grand_total == 0
        assert summary.crisis_rate == 0.0
