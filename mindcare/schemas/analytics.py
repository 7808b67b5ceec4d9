from datetime import date
from typing import Dict, List

from mindcare.schemas.base import CamelModel


class DailyRiskCounter(CamelModel):
    date: date
    counts: Dict[str, int]  # every tier present, zero-filled


class DailyAssessmentCounter(CamelModel):
    date: date
    counts: Dict[str, int]  # every instrument present, zero-filled


class RiskSummary(CamelModel):
    totals: Dict[str, int]
    grand_total: int
    high_risk_total: int
    crisis_rate: float  # crisis / grand total, 0.0 when there is nothing to count


class AnalyticsReport(CamelModel):
    range_days: int
    risk_analytics: List[DailyRiskCounter]
    assessment_analytics: List[DailyAssessmentCounter]
    risk_summary: RiskSummary
    users_by_role: Dict[str, int]
    total_users: int
    total_appointments: int
