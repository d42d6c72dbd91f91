# =============================================================================
# core/models/stats.py - Portfolio Statistics Schema
# =============================================================================
# Derived on every request from the companies collection; never stored.
# =============================================================================

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class PortfolioStats(BaseModel):
    """
    Aggregate counters shown on the portfolio landing page.

    Example:
        {
            "totalExperience": "4.2",
            "totalCompanies": 3,
            "totalProjects": 11,
            "totalTechnologies": 17,
            "currentPosition": true,
            "lastUpdated": "2024-05-01T09:00:00.000Z"
        }
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_experience: str = Field(..., description="Decimal years, one decimal place")
    total_companies: int = Field(..., ge=0)
    total_projects: int = Field(..., ge=0)
    total_technologies: int = Field(..., ge=0, description="Distinct technologies")
    current_position: bool
    last_updated: str


class FormattedDate(BaseModel):
    """Response body of the date formatting utility."""
    formatted: str
