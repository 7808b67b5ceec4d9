"""
MindCare risk tiers and the lexical risk classifier.
Keyword membership only: crisis overrides high, high overrides moderate, else low.
"""
from enum import Enum
from typing import Optional


class RiskTier(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    CRISIS = "crisis"

    @property
    def rank(self) -> int:
        return _TIER_ORDER.index(self)

    def __lt__(self, other):
        if not isinstance(other, RiskTier):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, RiskTier):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, RiskTier):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, RiskTier):
            return NotImplemented
        return self.rank >= other.rank

    __hash__ = str.__hash__


# Least to most severe
_TIER_ORDER = (RiskTier.LOW, RiskTier.MODERATE, RiskTier.HIGH, RiskTier.CRISIS)
RISK_TIERS = _TIER_ORDER

CRISIS_KEYWORDS = ["suicide", "kill myself", "end it all", "die", "harm myself"]
HIGH_RISK_KEYWORDS = ["hopeless", "worthless", "desperate", "can't cope", "overwhelming"]
MODERATE_RISK_KEYWORDS = ["sad", "anxious", "worried", "stressed", "depressed"]

# Tested in this order; the first set with a hit decides the tier
_KEYWORD_TIERS = (
    (RiskTier.CRISIS, CRISIS_KEYWORDS),
    (RiskTier.HIGH, HIGH_RISK_KEYWORDS),
    (RiskTier.MODERATE, MODERATE_RISK_KEYWORDS),
)


def classify(text: Optional[str]) -> RiskTier:
    """
    Map free text to a risk tier. Substring match, not whole-word:
    "die" also fires inside "diet". Empty text is low.
    """
    msg = (text or "").lower()
    if not msg:
        return RiskTier.LOW
    for tier, keywords in _KEYWORD_TIERS:
        for kw in keywords:
            if kw in msg:
                return tier
    return RiskTier.LOW


def needs_escalation(tier: RiskTier) -> bool:
    """True for tiers that warrant an auto-scheduled counsellor follow-up."""
    return tier >= RiskTier.HIGH
