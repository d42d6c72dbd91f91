# =============================================================================
# app/routers/stats.py - Portfolio Statistics Endpoint
# =============================================================================

from fastapi import APIRouter, Depends

from app.dependencies import StatsServiceDep
from app.middleware.rate_limit import rate_limit

router = APIRouter(dependencies=[Depends(rate_limit("stats"))])


@router.get("")
async def get_stats(service: StatsServiceDep):
    """Aggregate statistics derived from the experience records."""
    stats = await service.get_stats()
    return {"success": True, "data": stats.model_dump(by_alias=True)}
