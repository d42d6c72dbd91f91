# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Portfolio API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings
from app.exceptions import (
    DatabaseConnectionError,
    PortfolioException,
    http_exception_handler,
    portfolio_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from app.middleware import PortfolioCORSMiddleware, RateLimitStore
from app.routers import apps, closed_tests, contact, experiences, health, stats, utils
from lib.mongo_client import MongoProvider

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    - Startup: Try to connect to MongoDB. A failure is logged, not fatal;
      requests reconnect lazily and /health reports the outage.
    - Shutdown: Close the MongoDB client.
    """
    logger.info(f"Starting Portfolio API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    try:
        await app.state.mongo.connect()
    except DatabaseConnectionError as e:
        logger.error(f"MongoDB unavailable at startup: {e.message}")

    yield

    logger.info("Shutting down Portfolio API")
    await app.state.mongo.close()


# Create FastAPI application
app = FastAPI(
    title="Portfolio API",
    description="""
## Backend for sumit.codes

Read endpoints for the portfolio site: work experience, App Store listings,
closed testing apps and aggregate stats, plus the contact form mailer.

Every response is a JSON envelope:

- success: `{"success": true, "data": ...}` (lists also carry `count`)
- failure: `{"success": false, "error": "...", "message": "..."}`
""",
    version=API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Health", "description": "API and database health"},
        {"name": "Experiences", "description": "Work experience timeline"},
        {"name": "Apps", "description": "Store listing lookups"},
        {"name": "Closed Tests", "description": "Apps in closed testing"},
        {"name": "Contact", "description": "Contact form"},
        {"name": "Stats", "description": "Aggregate portfolio statistics"},
        {"name": "Utils", "description": "Formatting helpers"},
    ],
)

# Shared state: the connection provider and the rate limit counters
app.state.mongo = MongoProvider.from_settings(settings)
app.state.rate_limits = RateLimitStore(max_keys=settings.RATE_LIMIT_MAX_KEYS)


# =============================================================================
# Middleware
# =============================================================================

app.add_middleware(
    PortfolioCORSMiddleware,
    allow_origins=settings.cors_origins_list,
)


# =============================================================================
# Exception Handlers
# =============================================================================

app.add_exception_handler(PortfolioException, portfolio_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)


# =============================================================================
# Routers
# =============================================================================

ROUTERS = [
    (health.router, "", "Health"),
    (experiences.router, "/experiences", "Experiences"),
    (apps.router, "/apps", "Apps"),
    (closed_tests.router, "/closed-tests", "Closed Tests"),
    (contact.router, "/contact", "Contact"),
    (stats.router, "/stats", "Stats"),
    (utils.router, "/utils", "Utils"),
]

for router, path, tag in ROUTERS:
    app.include_router(router, prefix=f"{settings.API_PREFIX}{path}", tags=[tag])

# Unprefixed aliases for older frontend builds (they called /health directly)
if settings.API_PREFIX:
    for router, path, tag in ROUTERS:
        app.include_router(router, prefix=path, tags=[tag], include_in_schema=False)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Health"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "Portfolio API",
        "version": API_VERSION,
        "docs": "/docs",
        "health": f"{settings.API_PREFIX}/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.API_HOST, port=settings.API_PORT)
