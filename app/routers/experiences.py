# =============================================================================
# app/routers/experiences.py - Work Experience Endpoints
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from app.dependencies import ExperienceServiceDep
from app.exceptions import NotFoundError
from app.middleware.rate_limit import rate_limit

router = APIRouter(dependencies=[Depends(rate_limit("experiences"))])


@router.get("")
async def list_experiences(service: ExperienceServiceDep):
    """
    List all experiences.

    Current positions first (earliest start first), then past positions
    (most recent start first).
    """
    experiences = await service.list_all()

    return {
        "success": True,
        "count": len(experiences),
        "data": [e.to_response() for e in experiences],
    }


@router.get("/{experience_id}")
async def get_experience(
    experience_id: Annotated[str, Path(description="Experience identifier")],
    service: ExperienceServiceDep,
):
    """Get a single experience by id."""
    experience = await service.get_by_id(experience_id)

    if experience is None:
        raise NotFoundError(
            error="Experience not found",
            message="No experience found with the provided ID",
        )

    return {"success": True, "data": experience.to_response()}
