"""Tests for the lexical risk classifier and tier ordering."""
import pytest

from mindcare.core.risk import (
    CRISIS_KEYWORDS,
    HIGH_RISK_KEYWORDS,
    MODERATE_RISK_KEYWORDS,
    RISK_TIERS,
    RiskTier,
    classify,
    needs_escalation,
)


class TestRiskTierOrder:

    def test_tiers_are_totally_ordered(self):
        assert RiskTier.LOW < RiskTier.MODERATE < RiskTier.HIGH < RiskTier.CRISIS
        assert sorted([RiskTier.CRISIS, RiskTier.LOW, RiskTier.HIGH, RiskTier.MODERATE]) == list(RISK_TIERS)

    def test_tier_values_are_the_wire_names(self):
        assert [t.value for t in RISK_TIERS] == ["low", "moderate", "high", "crisis"]

    def test_tier_usable_as_plain_string_key(self):
        counts = {"low": 3, "crisis": 1}
        assert counts[RiskTier.CRISIS] == 1

    def test_only_high_and_crisis_escalate(self):
        assert [needs_escalation(t) for t in RISK_TIERS] == [False, False, True, True]


class TestClassify:

    def test_empty_text_is_low(self):
        assert classify("") == RiskTier.LOW
        assert classify(None) == RiskTier.LOW

    def test_neutral_text_is_low(self):
        assert classify("Had a good day at the library") == RiskTier.LOW

    @pytest.mark.parametrize("keyword", CRISIS_KEYWORDS)
    def test_crisis_keywords(self, keyword):
        assert classify(f"lately I think about {keyword} a lot") == RiskTier.CRISIS

    @pytest.mark.parametrize("keyword", HIGH_RISK_KEYWORDS)
    def test_high_keywords(self, keyword):
        assert classify(f"everything feels {keyword}") == RiskTier.HIGH

    @pytest.mark.parametrize("keyword", MODERATE_RISK_KEYWORDS)
    def test_moderate_keywords(self, keyword):
        assert classify(f"I am {keyword} about exams") == RiskTier.MODERATE

    def test_case_insensitive(self):
        assert classify("I WANT TO KILL MYSELF") == RiskTier.CRISIS
        assert classify("Feeling Hopeless") == RiskTier.HIGH

    def test_crisis_wins_over_lower_keywords(self):
        assert classify("I'm sad and stressed and I want to end it all") == RiskTier.CRISIS
        assert classify("hopeless, worthless, I want to die") == RiskTier.CRISIS

    def test_high_wins_over_moderate(self):
        assert classify("I'm anxious and it's overwhelming") == RiskTier.HIGH

    def test_substring_match_not_whole_word(self):
        # Known imprecision: "die" inside "diet", "sad" inside "crusade"
        assert classify("starting a new diet") == RiskTier.CRISIS
        assert classify("on a crusade for better grades") == RiskTier.MODERATE

    def test_always_returns_a_tier(self):
        for text in ["", "hello", "so sad", "desperate", "suicide"]:
            assert classify(text) in RISK_TIERS
