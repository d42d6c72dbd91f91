# =============================================================================
# app/middleware/cors.py - CORS Handling
# =============================================================================
# Reflects allow-listed origins and answers preflight requests directly.
#
# Starlette's CORSMiddleware only emits the Allow-* headers for matching
# origins and rejects unknown preflights with 400; the portfolio frontend
# expects the method/header advertisement on every response and a plain
# 200 for every OPTIONS request, so this middleware does it by hand.
# =============================================================================

import logging

from fastapi import Request
from fastapi.responses import Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from app.exceptions import internal_error_response

logger = logging.getLogger(__name__)

ALLOW_METHODS = "GET, POST, PUT, DELETE, OPTIONS"
ALLOW_HEADERS = "Content-Type, Authorization"
MAX_AGE_SECONDS = "86400"


class PortfolioCORSMiddleware(BaseHTTPMiddleware):
    """
    CORS middleware for the portfolio API.

    Also converts exceptions escaping the router into the 500 envelope, so
    error responses carry CORS headers too.
    """

    def __init__(self, app: ASGIApp, allow_origins: list[str]):
        super().__init__(app)
        self.allow_origins = set(allow_origins)

    def apply_headers(self, request: Request, response: Response) -> Response:
        origin = request.headers.get("Origin")
        if origin and origin in self.allow_origins:
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers["Vary"] = "Origin"

        response.headers["Access-Control-Allow-Methods"] = ALLOW_METHODS
        response.headers["Access-Control-Allow-Headers"] = ALLOW_HEADERS
        response.headers["Access-Control-Allow-Credentials"] = "true"
        response.headers["Access-Control-Max-Age"] = MAX_AGE_SECONDS
        return response

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.method == "OPTIONS":
            return self.apply_headers(request, Response(content="", status_code=200))

        try:
            response = await call_next(request)
        except Exception as e:
            logger.exception(f"Unhandled error on {request.method} {request.url.path}: {e}")
            response = internal_error_response()

        return self.apply_headers(request, response)
