# =============================================================================
# core/services/app_store_service.py - Store Listing Lookups
# =============================================================================
# App Store data comes from Apple's public lookup API.
#
# Play Store lookups are withdrawn: Google offers no public API and the
# scraped HTML changed too often to maintain. The route answers 410 Gone
# and the frontend falls back to its own static data.
# =============================================================================

import logging
from typing import Any

import httpx

from app.constants import APP_STORE_USER_AGENT, MESSAGES
from app.exceptions import UpstreamError, WithdrawnCapabilityError
from core.models.app_store import AppStoreApp

logger = logging.getLogger(__name__)

APP_STORE_FAILURE = "Failed to fetch App Store data"


class AppStoreService:
    """
    Fetches and reshapes third-party store listings.

    Example:
        service = AppStoreService(lookup_url="https://itunes.apple.com/lookup")
        app = await service.get_app_store_app("389801252")
        print(app.name, app.rating)
    """

    def __init__(
        self,
        lookup_url: str,
        country: str = "us",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._lookup_url = lookup_url
        self._country = country
        self._timeout = timeout
        self._transport = transport

    async def _lookup(self, app_id: str) -> dict[str, Any]:
        async with httpx.AsyncClient(
            timeout=self._timeout,
            transport=self._transport,
            headers={"User-Agent": APP_STORE_USER_AGENT},
        ) as client:
            response = await client.get(
                self._lookup_url,
                params={"id": app_id, "country": self._country},
            )

        if response.status_code < 200 or response.status_code >= 300:
            raise UpstreamError(APP_STORE_FAILURE, f"iTunes API error: {response.status_code}")

        try:
            return response.json()
        except ValueError:
            raise UpstreamError(APP_STORE_FAILURE, "iTunes API returned invalid JSON")

    async def get_app_store_app(self, app_id: str) -> AppStoreApp:
        """
        Look up an iOS app by its numeric App Store id.

        Returns:
            AppStoreApp built from the first lookup result

        Raises:
            UpstreamError: On non-2xx status, transport failure, timeout or
                an empty result set
        """
        try:
            payload = await self._lookup(app_id)
        except UpstreamError as e:
            logger.error(f"App Store lookup for {app_id} failed: {e.message}")
            raise
        except httpx.HTTPError as e:
            logger.error(f"App Store lookup for {app_id} failed: {type(e).__name__}: {e}")
            raise UpstreamError(APP_STORE_FAILURE, "Could not reach the App Store lookup API")

        results = payload.get("results") if isinstance(payload, dict) else None
        if not results:
            logger.info(f"App Store lookup for {app_id} returned no results")
            raise UpstreamError(APP_STORE_FAILURE, "App not found")

        return AppStoreApp.from_lookup(results[0], fallback_id=app_id)

    async def get_play_store_app(self, package_name: str) -> AppStoreApp:
        """
        Withdrawn capability.

        Always raises, whatever the package name; there is nothing to retry.

        Raises:
            WithdrawnCapabilityError: Always (410 Gone)
        """
        logger.debug(f"Play Store lookup requested for {package_name} (withdrawn)")
        raise WithdrawnCapabilityError(
            error="Play Store scraping is deprecated",
            message=MESSAGES.PLAY_STORE_WITHDRAWN,
        )
