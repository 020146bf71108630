"""
Rate limiting for PetVally.
Provides the shared slowapi limiter used by the credential endpoints.
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from ..config.settings import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

# One limiter for the whole app so limits are shared across routers
limiter = Limiter(
    key_func=get_remote_address,
    enabled=settings.RATE_LIMIT_ENABLED,
)


def auth_rate_limit() -> str:
    """Limit for credential endpoints, read per request so configuration changes apply."""
    return get_settings().AUTH_RATE_LIMIT


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Render slowapi rejections in the API error envelope."""
    logger.warning(f"Rate limit exceeded for {get_remote_address(request)} on {request.url.path}")
    return JSONResponse(
        status_code=429,
        content={
            "message": "Too many requests. Please try again later.",
            "error": {"code": "RATE_LIMIT_EXCEEDED", "details": {"limit": str(exc.detail)}},
        },
    )
