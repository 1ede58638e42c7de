"""
Origin allow-list gate.

Runs before routing: a request whose `Origin` header is not allowed gets a
403 and never reaches authentication or the resource handlers.
"""

from __future__ import annotations

import logging
import os

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

DEFAULT_ALLOWED_ORIGINS = "https://example.com"

logger = logging.getLogger(__name__)


def allowed_origins() -> frozenset[str]:
    raw = os.environ.get("ALLOWED_ORIGINS", DEFAULT_ALLOWED_ORIGINS)
    return frozenset(o.strip().rstrip("/") for o in raw.split(",") if o.strip())


def is_allowed_origin(origin: str | None, allowed: frozenset[str]) -> bool:
    if not origin:
        return False
    return origin.strip() in allowed


class OriginGateMiddleware(BaseHTTPMiddleware):
    """
    Reject requests from origins outside the allow-list.

    Allowed requests get `Access-Control-Allow-Origin` echoed back.
    Requests without an `Origin` header are rejected too.
    """

    def __init__(self, app, allowed: frozenset[str] | None = None) -> None:
        super().__init__(app)
        self.allowed = allowed if allowed is not None else allowed_origins()

    async def dispatch(self, request: Request, call_next):
        origin = request.headers.get("origin")
        if not is_allowed_origin(origin, self.allowed):
            logger.info("origin_rejected origin=%s path=%s", origin, request.url.path)
            return JSONResponse(
                status_code=status.HTTP_403_FORBIDDEN,
                content={"message": "Forbidden"},
            )

        response = await call_next(request)
        response.headers["Access-Control-Allow-Origin"] = origin.strip()
        response.headers["Vary"] = "Origin"
        return response
