# =============================================================================
# core/models/experience.py - Work Experience Schemas
# =============================================================================
# One document in the `companies` collection is one position held at one
# company. Records are entered out-of-band and are read-only here.
#
# Wire format uses the frontend's camelCase keys and keeps `_id` alongside
# `id`, since the portfolio site has always read `_id`.
# =============================================================================

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from lib.utils import (
    coerce_list,
    coerce_text,
    is_current_position,
    normalize_id,
    parse_date,
    to_iso,
    to_jsonable,
)


def _stored_date(value: Any) -> str | None:
    """Keep strings as entered; render native and wrapped dates as ISO-8601."""
    if is_current_position(value):
        return None
    if isinstance(value, str):
        return value
    parsed = parse_date(value)
    return to_iso(parsed) if parsed else None


class Experience(BaseModel):
    """
    A single work-experience record.

    Example:
        {
            "_id": "acme",
            "companyName": "Acme Corp",
            "position": "Mobile Engineer",
            "workStart": "2021-04-01",
            "workEnd": null,
            "technologies": ["Kotlin", "Flutter"]
        }
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    id: str = Field(..., alias="_id", description="Database identifier as a string")
    company_name: str = ""
    position: str = ""
    work_start: str | None = Field(default=None, description="Start date as stored")
    work_end: str | None = Field(default=None, description="End date; None means current")
    description: str = ""
    technologies: list[str] = Field(default_factory=list)

    logo: str | None = None
    website: str | None = None
    location: str | None = None

    # Project lists feed the stats counters
    play_store_apps: list[Any] = Field(default_factory=list)
    app_store_apps: list[Any] = Field(default_factory=list)
    web_apps: list[Any] = Field(default_factory=list)

    @property
    def is_current(self) -> bool:
        return self.work_end is None

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "Experience":
        """
        Map a stored document of any vintage onto an Experience.

        Never raises for odd field types; they are coerced instead.
        """
        known = {
            "_id", "id", "companyName", "position", "workStart", "workEnd",
            "description", "technologies", "logo", "website", "location",
            "playStoreApps", "appStoreApps", "webApps",
        }
        extras = {k: to_jsonable(v) for k, v in doc.items() if k not in known}

        optional = {}
        for key in ("logo", "website", "location"):
            value = doc.get(key)
            optional[key] = None if value is None else coerce_text(value)

        return cls.model_validate({
            **extras,
            "_id": normalize_id(doc.get("_id")),
            "companyName": coerce_text(doc.get("companyName")),
            "position": coerce_text(doc.get("position")),
            "workStart": _stored_date(doc.get("workStart")),
            "workEnd": _stored_date(doc.get("workEnd")),
            "description": coerce_text(doc.get("description")),
            "technologies": [coerce_text(t) for t in coerce_list(doc.get("technologies")) if t is not None],
            "playStoreApps": to_jsonable(coerce_list(doc.get("playStoreApps"))),
            "appStoreApps": to_jsonable(coerce_list(doc.get("appStoreApps"))),
            "webApps": to_jsonable(coerce_list(doc.get("webApps"))),
            **optional,
        })

    def to_response(self) -> dict[str, Any]:
        """Serialize with wire keys; exposes the identifier as both `_id` and `id`."""
        data = self.model_dump(by_alias=True)
        data["id"] = self.id
        return data
