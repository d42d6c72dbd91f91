# =============================================================================
# core/services/closed_test_service.py - Closed Testing Queries
# =============================================================================
# Read-only access to the closed_tests collection.
#
# "Active" means: isActive is anything other than False or "false". Missing,
# empty and "true" all count. Listing and counting use the same rule.
# =============================================================================

import logging
from typing import Any

from bson import ObjectId

from app.constants import COLLECTIONS
from core.models.closed_test import ClosedTest
from core.services.base import CollectionService
from lib.utils import normalize_is_active

logger = logging.getLogger(__name__)

ACTIVE_FILTER = {"isActive": {"$nin": [False, "false"]}}


class ClosedTestService(CollectionService):
    """Service for the closed_tests collection."""

    collection_name = COLLECTIONS.CLOSED_TESTS

    async def list_all(self) -> list[ClosedTest]:
        """
        Get every active closed test.

        Inactive records are filtered after the fetch so that odd stored
        representations go through the same normalization as everything else.

        Raises:
            FetchError: If the query fails or exceeds its timeout
        """
        documents = await self.run_query(
            lambda col: col.find({}).to_list(None),
            "Failed to fetch closed tests",
        )
        tests = [
            ClosedTest.from_document(doc)
            for doc in documents
            if normalize_is_active(doc.get("isActive"))
        ]
        logger.debug(f"Fetched {len(tests)} active closed tests of {len(documents)}")
        return tests

    async def get_by_id(self, test_id: str) -> ClosedTest | None:
        """
        Get a closed test by identifier.

        Ids that look like an ObjectId are tried in that form first, then as
        a raw string (some records were imported with string ids).

        Returns:
            ClosedTest, or None if neither form matches
        """
        async def lookup(col: Any) -> dict[str, Any] | None:
            if ObjectId.is_valid(test_id):
                doc = await col.find_one({"_id": ObjectId(test_id)})
                if doc:
                    return doc
            return await col.find_one({"_id": test_id})

        doc = await self.run_query(lookup, "Failed to fetch closed test")
        return ClosedTest.from_document(doc) if doc else None

    async def get_by_package_name(self, package_name: str) -> ClosedTest | None:
        """Exact match on packageName; None when absent."""
        doc = await self.run_query(
            lambda col: col.find_one({"packageName": package_name}),
            "Failed to fetch closed test",
        )
        return ClosedTest.from_document(doc) if doc else None

    async def check_testing_status(self, package_name: str) -> dict[str, Any]:
        """
        Decide whether an app is in closed testing.

        An app is considered in closed testing when it is curated in the
        collection. Play Store scraping is no longer used for this.

        Returns:
            {"isInClosedTesting": bool, "appData": record or placeholder}
        """
        test = await self.get_by_package_name(package_name)
        if test:
            return {"isInClosedTesting": True, "appData": test.to_response()}
        return {
            "isInClosedTesting": False,
            "appData": {"packageName": package_name, "isAvailable": False},
        }

    async def count(self) -> int:
        """Number of active closed tests."""
        return await self.run_query(
            lambda col: col.count_documents(ACTIVE_FILTER),
            "Failed to count closed tests",
        )
