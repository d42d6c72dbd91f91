# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# This package contains the FastAPI web application:
# - main.py: App entry point, middleware setup, error handlers
# - config.py: Environment variable loading and settings
# - constants.py: Rate limit rules, collection names, fixed messages
# - exceptions.py: Error envelope and exception handlers
# - dependencies.py: Provider and service injection
# - middleware/: CORS and per-route rate limiting
# - routers/: API endpoint definitions organized by feature
#
# The app layer is thin - it handles HTTP concerns and delegates
# business logic to the core/ package.
# =============================================================================
