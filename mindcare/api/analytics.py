"""Admin analytics: daily risk and assessment counters, risk summary, headcounts."""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from mindcare.api.dependencies import get_store, require_admin
from mindcare.core.permissions import AdminAuthorization
from mindcare.db.kv_store import KVStore
from mindcare.schemas.analytics import AnalyticsReport
from mindcare.services.analytics import analytics_report

router = APIRouter()


@router.get("", response_model=AnalyticsReport)
async def get_analytics(
    range_days: Optional[int] = Query(None, alias="rangeDays"),
    authorization: AdminAuthorization = Depends(require_admin),
    store: KVStore = Depends(get_store),
):
    return analytics_report(store, authorization, range_days)
