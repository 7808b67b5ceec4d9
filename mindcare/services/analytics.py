"""Admin analytics report: daily series, risk summary and headcounts."""
import logging
from datetime import date
from typing import Optional

from mindcare.core.analytics import aggregate_assessment_series, aggregate_risk_series, summarize_risk
from mindcare.core.errors import InvalidInputError
from mindcare.core.permissions import AdminAuthorization
from mindcare.config import settings
from mindcare.db.kv_store import KVStore
from mindcare.schemas.analytics import AnalyticsReport
from mindcare.services.appointments import count_appointments
from mindcare.services.directory import users_by_role

logger = logging.getLogger(__name__)


def analytics_report(
    store: KVStore,
    authorization: AdminAuthorization,
    range_days: Optional[int] = None,
    today: Optional[date] = None,
) -> AnalyticsReport:
    days = settings.analytics_default_range_days if range_days is None else range_days
    if not 1 <= days <= settings.analytics_max_range_days:
        raise InvalidInputError(f"rangeDays must be between 1 and {settings.analytics_max_range_days}")

    risk_series = aggregate_risk_series(store, days, today=today)
    roles = users_by_role(store)
    logger.debug("Analytics report for admin=%s range_days=%s", authorization.admin_id, days)
    return AnalyticsReport(
        range_days=days,
        risk_analytics=risk_series,
        assessment_analytics=aggregate_assessment_series(store, days, today=today),
        risk_summary=summarize_risk(risk_series),
        users_by_role=roles,
        total_users=sum(roles.values()),
        total_appointments=count_appointments(store),
    )
