# =============================================================================
# core/services/stats_service.py - Portfolio Statistics
# =============================================================================
# Aggregates the companies collection into the landing-page counters, and
# formats experience dates for display.
#
# Experience length uses whole-month arithmetic on purpose: it matches how
# the timeline renders ("Jan 2020 - Jul 2023") rather than exact day counts.
# =============================================================================

import logging
from datetime import date, datetime, timezone
from decimal import ROUND_HALF_UP, Decimal

from app.exceptions import FetchError, ValidationError
from core.models.experience import Experience
from core.models.stats import PortfolioStats
from core.services.experience_service import ExperienceService
from lib.utils import parse_date, to_iso

logger = logging.getLogger(__name__)

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

PROJECT_FIELDS = ("play_store_apps", "app_store_apps", "web_apps")


def calculate_duration(start: date, end: date) -> str:
    """
    Whole months between two dates, as decimal years with one decimal place.

    A month only counts once its day-of-month is reached: Jan 15 to Feb 14
    is zero months. Halves round up (15 months -> "1.3").

    Example:
        calculate_duration(date(2020, 1, 15), date(2023, 7, 10))  # "3.4"

    Returns:
        "0.0" when the span is under one month (or negative)
    """
    years = end.year - start.year
    months = end.month - start.month

    if end.day < start.day:
        months -= 1

    if months < 0:
        years -= 1
        months += 12

    total_months = years * 12 + months
    if total_months <= 0:
        return "0.0"

    decimal_years = (Decimal(total_months) / Decimal(12)).quantize(
        Decimal("0.1"), rounding=ROUND_HALF_UP
    )
    return str(decimal_years)


def format_exp_date(value: str | None) -> str:
    """
    Render a date as "Mon YYYY" for the experience timeline.

    None and the literal string "null" mean an ongoing position.

    Example:
        format_exp_date("2023-03-15")  # "Mar 2023"
        format_exp_date(None)          # "Present"

    Raises:
        ValidationError: If the value is not a recognizable date
    """
    if value is None or value == "null":
        return "Present"

    parsed = parse_date(value)
    if parsed is None:
        raise ValidationError(f"Invalid date: {value}", error="Failed to format date")
    return f"{MONTH_ABBREVIATIONS[parsed.month - 1]} {parsed.year}"


def build_stats(experiences: list[Experience], now: datetime | None = None) -> PortfolioStats:
    """Pure aggregation over already-loaded records."""
    now = now or datetime.now(timezone.utc)

    current_position = any(e.is_current for e in experiences)
    total_projects = sum(len(getattr(e, field)) for e in experiences for field in PROJECT_FIELDS)
    technologies = {tech for e in experiences for tech in e.technologies}

    total_experience = "0.0"
    starts = [d for d in (parse_date(e.work_start) for e in experiences) if d is not None]
    if starts:
        earliest_start = min(starts)
        if current_position:
            latest_end = now
        else:
            ends = [d for d in (parse_date(e.work_end) for e in experiences) if d is not None]
            latest_end = max(ends) if ends else now
        total_experience = calculate_duration(earliest_start.date(), latest_end.date())

    return PortfolioStats(
        total_experience=total_experience,
        total_companies=len(experiences),
        total_projects=total_projects,
        total_technologies=len(technologies),
        current_position=current_position,
        last_updated=to_iso(now),
    )


class StatsService:
    """Derives PortfolioStats from the experience records on every call."""

    def __init__(self, experiences: ExperienceService):
        self._experiences = experiences

    async def get_stats(self) -> PortfolioStats:
        """
        Compute portfolio statistics.

        Raises:
            FetchError: If the experience records cannot be loaded
        """
        try:
            documents = await self._experiences.fetch_documents()
        except FetchError:
            logger.error("Error calculating stats: experiences unavailable")
            raise FetchError("Failed to calculate statistics")

        experiences = [Experience.from_document(doc) for doc in documents]
        stats = build_stats(experiences)
        logger.debug(f"Stats computed over {len(experiences)} records")
        return stats
