# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .app_store_service import AppStoreService
from .closed_test_service import ClosedTestService
from .email_service import EmailService
from .experience_service import ExperienceService, sort_experiences
from .stats_service import StatsService, calculate_duration, format_exp_date

__all__ = [
    "AppStoreService",
    "ClosedTestService",
    "EmailService",
    "ExperienceService",
    "StatsService",
    "calculate_duration",
    "format_exp_date",
    "sort_experiences",
]
