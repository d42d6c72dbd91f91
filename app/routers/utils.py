# =============================================================================
# app/routers/utils.py - Formatting Utilities
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from app.middleware.rate_limit import rate_limit
from core.models.stats import FormattedDate
from core.services.stats_service import format_exp_date

router = APIRouter(dependencies=[Depends(rate_limit("default"))])


@router.get("/format-date/{date}")
async def format_date(
    date: Annotated[str, Path(description="Date string, or the literal 'null'")],
):
    """
    Format an experience date as "Mon YYYY".

    "null" returns "Present".
    """
    formatted = format_exp_date(date)
    return {"success": True, "data": FormattedDate(formatted=formatted).model_dump()}
