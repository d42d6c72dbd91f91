# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - mongo_client.py: MongoDB connection provider (connect/acquire/release/close)
# - utils.py: Shared coercion helpers (ids, dates, isActive flags)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.mongo_client import MongoProvider, to_direct_uri
from lib.utils import (
    normalize_date,
    normalize_id,
    normalize_is_active,
    parse_date,
    to_iso,
)

__all__ = [
    # MongoDB
    "MongoProvider",
    "to_direct_uri",
    # Utils
    "normalize_date",
    "normalize_id",
    "normalize_is_active",
    "parse_date",
    "to_iso",
]
