# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Coercion helpers for stored documents. Portfolio records were written by
# hand, by scripts and by Compass exports over the years, so the same field
# can arrive as a native datetime, a string, epoch millis or an Extended JSON
# wrapper. These helpers map all of them onto one canonical form.
# =============================================================================

from datetime import date, datetime, timezone
from typing import Any

from bson import ObjectId, Timestamp


# =============================================================================
# Identifier Utilities
# =============================================================================

def normalize_id(value: Any) -> str:
    """
    Normalize a document identifier to string format.

    Handles ObjectId, plain strings and any other id type the database
    may hold, ensuring consistent string output.

    Example:
        normalize_id(ObjectId("65a1f0c2e4b0a1b2c3d4e5f6"))  # "65a1f0c2e4b0a1b2c3d4e5f6"
        normalize_id("acme-2021")                          # "acme-2021"
    """
    if isinstance(value, ObjectId):
        return str(value)
    return "" if value is None else str(value)


# =============================================================================
# Date Utilities
# =============================================================================

_FALLBACK_FORMATS = (
    "%Y-%m-%d %H:%M:%S",
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%Y-%m",
    "%b %Y",
    "%B %Y",
    "%Y",
)


def _from_millis(value: float) -> datetime:
    return datetime.fromtimestamp(value / 1000, tz=timezone.utc)


def _parse_string(value: str) -> datetime | None:
    text = value.strip()
    if not text or text.lower() in ("null", "none", "undefined"):
        return None

    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        pass

    for fmt in _FALLBACK_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def parse_date(value: Any) -> datetime | None:
    """
    Parse any stored date representation into an aware UTC datetime.

    Supported shapes:
    - datetime / date objects (naive values are taken as UTC)
    - ISO-8601 and a few common human formats
    - epoch milliseconds (int/float)
    - Extended JSON: {"$date": "..."}, {"$date": 1700000000000},
      {"$date": {"$numberLong": "..."}}, {"$timestamp": {"t": 1700000000, "i": 1}}
    - bson.Timestamp

    Returns:
        The parsed datetime, or None when the value is empty or unparseable.
    """
    parsed: datetime | None = None

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, Timestamp):
        parsed = value.as_datetime()
    elif isinstance(value, (int, float)):
        try:
            parsed = _from_millis(value)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str):
        parsed = _parse_string(value)
    elif isinstance(value, dict):
        if "$date" in value:
            inner = value["$date"]
            if isinstance(inner, dict) and "$numberLong" in inner:
                try:
                    inner = int(inner["$numberLong"])
                except (TypeError, ValueError):
                    return None
            return parse_date(inner)
        if "$timestamp" in value:
            inner = value["$timestamp"]
            if isinstance(inner, dict):
                seconds = inner.get("t")
                if not isinstance(seconds, (int, float)) or isinstance(seconds, bool):
                    return None
                return parse_date(seconds * 1000)
            return parse_date(inner)

    if parsed is None:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def to_iso(value: datetime) -> str:
    """Render a datetime as UTC ISO-8601 with millisecond precision ('...000Z')."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def utc_now_iso() -> str:
    return to_iso(datetime.now(timezone.utc))


def normalize_date(value: Any) -> str:
    """
    Normalize any stored date to an ISO-8601 string.

    Never raises: unparseable or missing values fall back to the current time.
    """
    parsed = parse_date(value)
    if parsed is None:
        return utc_now_iso()
    return to_iso(parsed)


# =============================================================================
# Flag Utilities
# =============================================================================

def normalize_is_active(value: Any) -> bool:
    """
    Coerce a stored isActive flag to a bool.

    Only an explicit False or the string "false" means inactive. True, "true",
    "", None and a missing field all mean active.
    """
    return not (value is False or value == "false")


def is_current_position(work_end: Any) -> bool:
    """A position is current when it has no usable end date."""
    if work_end is None:
        return True
    if isinstance(work_end, str) and work_end.strip().lower() in ("", "null"):
        return True
    return False


# =============================================================================
# Serialization Utilities
# =============================================================================

def to_jsonable(value: Any) -> Any:
    """
    Recursively convert BSON-specific values into JSON-safe ones.

    Used for pass-through fields the typed models don't declare.
    """
    if isinstance(value, dict):
        if "$date" in value or "$timestamp" in value:
            return normalize_date(value)
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, (datetime, Timestamp)):
        return normalize_date(value)
    if isinstance(value, date):
        return value.isoformat()
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)


def coerce_text(value: Any) -> str:
    """Stored text fields may be missing or non-string; always return a str."""
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def coerce_list(value: Any) -> list[Any]:
    """Stored list fields may be missing or scalar; always return a list."""
    if isinstance(value, list):
        return value
    if value is None or value == "":
        return []
    return [value]
