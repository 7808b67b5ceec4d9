"""Counsellor directory and self-help resources (public)."""
from fastapi import APIRouter, Depends

from mindcare.api.dependencies import get_store
from mindcare.core.responses import resources_for
from mindcare.core.risk import RiskTier
from mindcare.db.kv_store import KVStore
from mindcare.schemas.user import CounsellorsResponse
from mindcare.services.directory import list_counsellors

router = APIRouter()


@router.get("/counsellors", response_model=CounsellorsResponse)
async def get_counsellors(store: KVStore = Depends(get_store)):
    return CounsellorsResponse(counsellors=list_counsellors(store))


@router.get("/resources")
async def get_resources(tier: RiskTier = RiskTier.LOW):
    return {"tier": tier.value, "resources": resources_for(tier)}
