"""Per-client rate limiting using slowapi."""

from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.requests import Request
from starlette.responses import JSONResponse

from app.config import settings
from app.models.envelope import error_response

limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)

# Limit string for endpoints that call the upstream model
LLM_LIMIT = f"{settings.rate_limit_llm}/minute"


def rate_limit_exceeded_handler(_request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Return the JSON error body when a client exceeds its limit."""
    return JSONResponse(
        status_code=429,
        content=error_response(f"Rate limit exceeded: {exc.detail}", "RATE_LIMITED"),
    )
