# =============================================================================
# app/constants.py - Static Tables
# =============================================================================
# Rate limit windows, collection names and canned user-facing messages.
# Deployment-specific values (hosts, credentials, origins) live in config.py.
# =============================================================================

from dataclasses import dataclass


@dataclass(frozen=True)
class RateLimitRule:
    """Fixed window: at most `max_requests` per `window_seconds`."""
    window_seconds: float
    max_requests: int


RATE_LIMITS: dict[str, RateLimitRule] = {
    "contact": RateLimitRule(window_seconds=60, max_requests=5),
    "appStore": RateLimitRule(window_seconds=60, max_requests=100),
    "experiences": RateLimitRule(window_seconds=60, max_requests=1000),
    "closedTests": RateLimitRule(window_seconds=60, max_requests=200),
    "stats": RateLimitRule(window_seconds=60, max_requests=500),
    "default": RateLimitRule(window_seconds=60, max_requests=100),
}


class COLLECTIONS:
    COMPANIES = "companies"
    CLOSED_TESTS = "closed_tests"


class MESSAGES:
    EMAIL_SENT = "Your message has been sent successfully! I'll get back to you soon."
    EMAIL_FAILED = (
        "Sorry, there was an error sending your message. "
        "Please try again or contact me directly."
    )
    DATABASE_CONNECTION = "Failed to connect to database"
    NOT_FOUND = "Resource not found"
    VALIDATION_FAILED = "Validation failed"
    RATE_LIMIT_EXCEEDED = "Rate limit exceeded"
    INTERNAL_SERVER_ERROR = "Internal server error"
    UNEXPECTED_ERROR = "An unexpected error occurred"
    PLAY_STORE_WITHDRAWN = (
        "This endpoint is deprecated due to unreliable web scraping. "
        "Use the frontend implementation instead."
    )


# Some CDNs in front of the lookup API reject requests without a browser UA
APP_STORE_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
