# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
#
# The connection provider lives on app.state (created in main.py); services
# are built per request around it. Tests override get_mongo_provider and
# get_app_store_service to avoid real I/O.
# =============================================================================

from typing import Annotated

from fastapi import Depends, Request

from app.config import settings
from core.services import (
    AppStoreService,
    ClosedTestService,
    EmailService,
    ExperienceService,
    StatsService,
)
from lib.mongo_client import MongoProvider


def get_mongo_provider(request: Request) -> MongoProvider:
    """
    Get the process-wide MongoDB provider.

    Returns the instance created at application startup.
    """
    return request.app.state.mongo


def get_experience_service(
    provider: Annotated[MongoProvider, Depends(get_mongo_provider)],
) -> ExperienceService:
    return ExperienceService(provider, query_timeout=settings.DB_QUERY_TIMEOUT_SECONDS)


def get_closed_test_service(
    provider: Annotated[MongoProvider, Depends(get_mongo_provider)],
) -> ClosedTestService:
    return ClosedTestService(provider, query_timeout=settings.DB_QUERY_TIMEOUT_SECONDS)


def get_stats_service(
    experiences: Annotated[ExperienceService, Depends(get_experience_service)],
) -> StatsService:
    return StatsService(experiences)


def get_app_store_service() -> AppStoreService:
    return AppStoreService(
        lookup_url=settings.APP_STORE_LOOKUP_URL,
        country=settings.APP_STORE_COUNTRY,
        timeout=settings.UPSTREAM_TIMEOUT_SECONDS,
    )


def get_email_service() -> EmailService:
    return EmailService(settings)


# Type aliases for dependency injection
MongoDep = Annotated[MongoProvider, Depends(get_mongo_provider)]
ExperienceServiceDep = Annotated[ExperienceService, Depends(get_experience_service)]
ClosedTestServiceDep = Annotated[ClosedTestService, Depends(get_closed_test_service)]
StatsServiceDep = Annotated[StatsService, Depends(get_stats_service)]
AppStoreServiceDep = Annotated[AppStoreService, Depends(get_app_store_service)]
EmailServiceDep = Annotated[EmailService, Depends(get_email_service)]
