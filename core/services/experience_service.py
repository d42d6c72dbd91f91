# =============================================================================
# core/services/experience_service.py - Work Experience Queries
# =============================================================================
# Read-only access to the companies collection, plus the ordering the
# portfolio timeline expects.
# =============================================================================

import logging
from datetime import datetime, timezone
from typing import Any

from app.constants import COLLECTIONS
from core.models.experience import Experience
from core.services.base import CollectionService
from lib.utils import parse_date

logger = logging.getLogger(__name__)

# Unparseable start dates sort as the oldest
_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _start_of(experience: Experience) -> datetime:
    return parse_date(experience.work_start) or _EPOCH


def sort_experiences(experiences: list[Experience]) -> list[Experience]:
    """
    Order records for the timeline.

    Current positions (no end date) come first, earliest start first.
    Past positions follow, most recent start first.
    """
    current = sorted((e for e in experiences if e.is_current), key=_start_of)
    past = sorted((e for e in experiences if not e.is_current), key=_start_of, reverse=True)
    return current + past


class ExperienceService(CollectionService):
    """
    Service for the companies collection.

    Provides a clean interface between API routes and database.
    """

    collection_name = COLLECTIONS.COMPANIES

    async def fetch_documents(self) -> list[dict[str, Any]]:
        """Every raw document, unsorted. Used by the stats aggregation."""
        return await self.run_query(
            lambda col: col.find({}).to_list(None),
            "Failed to fetch experiences",
        )

    async def list_all(self) -> list[Experience]:
        """
        Get all experiences in timeline order.

        Returns:
            List of Experience (empty when the collection is empty)

        Raises:
            FetchError: If the query fails or exceeds its timeout
        """
        documents = await self.fetch_documents()
        experiences = [Experience.from_document(doc) for doc in documents]
        logger.debug(f"Fetched {len(experiences)} experiences")
        return sort_experiences(experiences)

    async def get_by_id(self, experience_id: str) -> Experience | None:
        """
        Get an experience by its identifier.

        The id is matched as an opaque string; it is never reinterpreted as
        an ObjectId.

        Returns:
            Experience, or None if no record has this id
        """
        doc = await self.run_query(
            lambda col: col.find_one({"_id": experience_id}),
            "Failed to fetch experience",
        )
        return Experience.from_document(doc) if doc else None

    async def count(self) -> int:
        """Total number of experience records."""
        return await self.run_query(
            lambda col: col.count_documents({}),
            "Failed to count experiences",
        )
