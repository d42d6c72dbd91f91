# =============================================================================
# core/models/app_store.py - App Store Listing Schema
# =============================================================================
# Reshaped result of the public iTunes lookup API. Fetched per request and
# never stored. Upstream omits fields freely (e.g. no rating for new apps),
# so everything except the id is optional.
# =============================================================================

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def _as_int(value: Any) -> int | None:
    # fileSizeBytes arrives as a numeric string
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _as_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


class AppStoreApp(BaseModel):
    """An iOS App Store listing."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str | None = None
    description: str | None = None
    icon: str | None = None
    screenshots: list[str] = Field(default_factory=list)
    app_store_url: str | None = None
    version: str | None = None
    rating: float | None = None
    rating_count: int | None = None
    price: float | None = None
    currency: str | None = None
    developer: str | None = None
    category: str | None = None
    release_date: str | None = None
    size: int | None = Field(default=None, description="Bytes")

    @classmethod
    def from_lookup(cls, result: dict[str, Any], fallback_id: str = "") -> "AppStoreApp":
        """
        Map one entry of the lookup API's `results` array.

        Args:
            result: Raw upstream result dict
            fallback_id: Used when upstream omits trackId
        """
        track_id = result.get("trackId")
        screenshots = result.get("screenshotUrls") or []

        return cls(
            id=str(track_id) if track_id is not None else fallback_id,
            name=result.get("trackName"),
            description=result.get("description"),
            icon=result.get("artworkUrl100"),
            screenshots=[str(s) for s in screenshots if s],
            app_store_url=result.get("trackViewUrl"),
            version=result.get("version"),
            rating=_as_float(result.get("averageUserRating")),
            rating_count=_as_int(result.get("userRatingCount")),
            price=_as_float(result.get("price")),
            currency=result.get("currency"),
            developer=result.get("artistName"),
            category=result.get("primaryGenreName"),
            release_date=result.get("releaseDate"),
            size=_as_int(result.get("fileSizeBytes")),
        )

    def to_response(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
