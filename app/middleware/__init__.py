# =============================================================================
# app/middleware/ - Request Middleware
# =============================================================================
# - cors.py: Origin allow-list, preflight short-circuit, error envelope fallback
# - rate_limit.py: Fixed-window limits per client and route category
# =============================================================================

from .cors import PortfolioCORSMiddleware
from .rate_limit import RateLimitStore, get_client_address, rate_limit

__all__ = [
    "PortfolioCORSMiddleware",
    "RateLimitStore",
    "get_client_address",
    "rate_limit",
]
