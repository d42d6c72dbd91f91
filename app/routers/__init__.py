# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check (MongoDB connectivity)
# - experiences.py: Work experience records
# - apps.py: App Store lookups (Play Store withdrawn)
# - closed_tests.py: Closed testing apps
# - contact.py: Contact form mailer
# - stats.py: Aggregate portfolio statistics
# - utils.py: Date formatting helper
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import experiences
from . import apps
from . import closed_tests
from . import contact
from . import stats
from . import utils

__all__ = [
    "health",
    "experiences",
    "apps",
    "closed_tests",
    "contact",
    "stats",
    "utils",
]
