# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the portfolio's business logic:
# - models/: Pydantic schemas and stored-document mappers
# - services/: Data access, upstream lookups, mail and statistics
#
# Services receive their collaborators (connection provider, settings,
# HTTP transport) through their constructors; routes build them via
# app/dependencies.py.
# =============================================================================
