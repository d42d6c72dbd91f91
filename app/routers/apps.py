# =============================================================================
# app/routers/apps.py - Store Listing Endpoints
# =============================================================================
# /app-store/{id}  - live lookup against Apple's public API
# /play-store/{id} - withdrawn; always 410 Gone
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from app.dependencies import AppStoreServiceDep
from app.middleware.rate_limit import rate_limit

router = APIRouter(dependencies=[Depends(rate_limit("appStore"))])


@router.get("/app-store/{app_id}")
async def get_app_store_app(
    app_id: Annotated[str, Path(description="Numeric App Store id")],
    service: AppStoreServiceDep,
):
    """Fetch App Store metadata for an iOS app."""
    app = await service.get_app_store_app(app_id)
    return {"success": True, "data": app.to_response()}


@router.get("/play-store/{package_name}", status_code=410)
async def get_play_store_app(
    package_name: Annotated[str, Path(description="Android package name")],
    service: AppStoreServiceDep,
):
    """
    Deprecated: Play Store data is no longer served.

    Scraping Google Play proved too brittle. The frontend supplies its own
    fallback data instead.
    """
    await service.get_play_store_app(package_name)
