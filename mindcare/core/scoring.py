"""
PHQ-9 and GAD-7 scoring: item scores -> total, severity label, risk tier.
Bands use inclusive upper bounds. GAD-7 has no crisis band.
"""
from enum import Enum
from typing import NamedTuple, Sequence, Union

from mindcare.core.errors import InvalidInputError
from mindcare.core.risk import RiskTier


class Instrument(str, Enum):
    PHQ9 = "PHQ-9"
    GAD7 = "GAD-7"


class ScoreResult(NamedTuple):
    total: int
    severity_label: str
    tier: RiskTier


ITEM_MIN = 0
ITEM_MAX = 3

ITEM_COUNTS = {
    Instrument.PHQ9: 9,
    Instrument.GAD7: 7,
}

# (inclusive upper bound, label, tier)
SEVERITY_BANDS = {
    Instrument.PHQ9: (
        (4, "Minimal Depression", RiskTier.LOW),
        (9, "Mild Depression", RiskTier.LOW),
        (14, "Moderate Depression", RiskTier.MODERATE),
        (19, "Moderately Severe Depression", RiskTier.HIGH),
        (27, "Severe Depression", RiskTier.CRISIS),
    ),
    Instrument.GAD7: (
        (4, "Minimal Anxiety", RiskTier.LOW),
        (9, "Mild Anxiety", RiskTier.LOW),
        (14, "Moderate Anxiety", RiskTier.MODERATE),
        (21, "Severe Anxiety", RiskTier.HIGH),
    ),
}

INSTRUMENT_QUESTIONS = {
    Instrument.PHQ9: [
        "Little interest or pleasure in doing things",
        "Feeling down, depressed, or hopeless",
        "Trouble falling or staying asleep, or sleeping too much",
        "Feeling tired or having little energy",
        "Poor appetite or overeating",
        "Feeling bad about yourself or that you are a failure",
        "Trouble concentrating on things",
        "Moving or speaking slowly or being fidgety",
        "Thoughts that you would be better off dead",
    ],
    Instrument.GAD7: [
        "Feeling nervous, anxious, or on edge",
        "Not being able to stop or control worrying",
        "Worrying too much about different things",
        "Trouble relaxing",
        "Being so restless that it's hard to sit still",
        "Becoming easily annoyed or irritable",
        "Feeling afraid as if something awful might happen",
    ],
}

ANSWER_OPTIONS = [
    {"value": 0, "label": "Not at all"},
    {"value": 1, "label": "Several days"},
    {"value": 2, "label": "More than half the days"},
    {"value": 3, "label": "Nearly every day"},
]


def parse_instrument(instrument: Union[str, Instrument]) -> Instrument:
    try:
        return Instrument(instrument)
    except ValueError:
        allowed = ", ".join(i.value for i in Instrument)
        raise InvalidInputError(f"Unknown instrument {instrument!r}; expected one of {allowed}")


def score(instrument: Union[str, Instrument], item_scores: Sequence[int]) -> ScoreResult:
    """
    Score a completed questionnaire.

    Raises InvalidInputError if the instrument is unknown, the number of items is wrong,
    or any item is not an integer in [0, 3].
    """
    inst = parse_instrument(instrument)
    expected = ITEM_COUNTS[inst]
    items = list(item_scores)
    if len(items) != expected:
        raise InvalidInputError(f"{inst.value} requires exactly {expected} item scores, got {len(items)}")
    for position, item in enumerate(items, start=1):
        # bool is an int subclass; True/False are not valid answers
        if isinstance(item, bool) or not isinstance(item, int) or not ITEM_MIN <= item <= ITEM_MAX:
            raise InvalidInputError(
                f"{inst.value} item {position} must be an integer between {ITEM_MIN} and {ITEM_MAX}, got {item!r}"
            )

    total = sum(items)
    for upper, label, tier in SEVERITY_BANDS[inst]:
        if total <= upper:
            return ScoreResult(total, label, tier)
    # Unreachable with validated items: the last band's bound is expected * ITEM_MAX
    raise InvalidInputError(f"{inst.value} total {total} is out of range")
