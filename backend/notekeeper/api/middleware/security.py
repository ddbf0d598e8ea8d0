from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware

from notekeeper.utils.logging import get_logger

if TYPE_CHECKING:
    from fastapi import Request
    from starlette.types import ASGIApp

logger = get_logger(__name__)

API_CSP = "default-src 'none'; frame-ancestors 'none'"


class SecurityMiddleware(BaseHTTPMiddleware):
    """Add API security headers and log traffic to the auth routes."""

    def __init__(self, app: ASGIApp, *, auth_path_prefix: str = "/api/auth"):
        super().__init__(app)
        self._auth_path_prefix = auth_path_prefix

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        # JSON only: nothing may be loaded or framed from a response
        response.headers["Content-Security-Policy"] = API_CSP

        if request.url.scheme == "https":
            response.headers["Strict-Transport-Security"] = "max-age=15552000; includeSubDomains"

        response.headers["Cache-Control"] = "no-store, no-cache, must-revalidate, max-age=0"

        if request.url.path.startswith(self._auth_path_prefix):
            client_ip = request.client.host if request.client else "unknown"
            user_agent = request.headers.get("user-agent", "unknown")

            logger.info(
                "Auth endpoint accessed",
                extra={
                    "path": request.url.path,
                    "method": request.method,
                    "status_code": response.status_code,
                    "ip": client_ip,
                    "user_agent": user_agent[:100],
                }
            )

        return response
