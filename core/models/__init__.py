# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - experience.py: Work experience records (companies collection)
# - closed_test.py: Closed testing apps (closed_tests collection)
# - app_store.py: App Store listing reshaped from the lookup API
# - contact.py: Contact form input and send result
# - stats.py: Derived portfolio statistics
#
# Stored documents enter through each model's from_document()/from_lookup(),
# which map any stored shape onto the canonical type.
# =============================================================================

from .app_store import AppStoreApp
from .closed_test import ClosedTest
from .contact import ContactFormData, EmailResult
from .experience import Experience
from .stats import FormattedDate, PortfolioStats

__all__ = [
    "AppStoreApp",
    "ClosedTest",
    "ContactFormData",
    "EmailResult",
    "Experience",
    "FormattedDate",
    "PortfolioStats",
]
