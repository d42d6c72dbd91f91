# =============================================================================
# core/services/base.py - Shared Data-Access Plumbing
# =============================================================================
# Every collection-backed service runs its queries through run_query(), which
# acquires a handle, bounds the query with a timeout, releases the handle and
# turns any failure into a FetchError carrying a fixed, client-safe message.
# =============================================================================

import asyncio
import logging
from typing import Any, Awaitable, Callable, TypeVar

from app.exceptions import FetchError
from lib.mongo_client import MongoProvider

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CollectionService:
    """Base for services reading one MongoDB collection."""

    collection_name: str = ""

    def __init__(self, provider: MongoProvider, query_timeout: float = 5.0):
        self._provider = provider
        self._query_timeout = query_timeout

    async def run_query(
        self,
        operation: Callable[[Any], Awaitable[T]],
        failure_message: str,
    ) -> T:
        """
        Run one query against this service's collection.

        Args:
            operation: Receives the collection, returns an awaitable result
            failure_message: Client-facing message if anything goes wrong

        Raises:
            FetchError: On connection failure, driver error or timeout
        """
        db = None
        try:
            db = await self._provider.acquire()
            collection = db[self.collection_name]
            return await asyncio.wait_for(operation(collection), timeout=self._query_timeout)
        except asyncio.TimeoutError:
            logger.error(
                f"{failure_message}: query on '{self.collection_name}' "
                f"exceeded {self._query_timeout}s"
            )
            raise FetchError(failure_message)
        except Exception as e:
            logger.error(f"{failure_message}: {type(e).__name__}: {e}")
            raise FetchError(failure_message) from e
        finally:
            if db is not None:
                self._provider.release(db)
