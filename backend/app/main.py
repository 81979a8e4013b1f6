"""FastAPI application entry point."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from app.api.routes import changetone, correct
from app.config import settings
from app.core.errors import AutocorrectError, MethodNotAllowedError
from app.middleware.rate_limiter import limiter, rate_limit_exceeded_handler
from app.middleware.request_id import RequestIDMiddleware, get_request_id
from app.models.envelope import error_response

logger = logging.getLogger(__name__)

# Configure logging format based on dev_mode
if not settings.dev_mode:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format='{"time":"%(asctime)s","level":"%(levelname)s","name":"%(name)s","message":"%(message)s"}',
    )
else:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )

app = FastAPI(
    title="Autocorrect API",
    description="Proofreading and tone rewriting backed by a generative-text model",
    version="0.1.0",
    docs_url="/docs" if settings.dev_mode else None,
    redoc_url="/redoc" if settings.dev_mode else None,
)

# ---------------------------------------------------------------------------
# Middleware
# ---------------------------------------------------------------------------

app.state.limiter = limiter


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        if not settings.dev_mode:
            response.headers["Strict-Transport-Security"] = (
                "max-age=63072000; includeSubDomains"
            )
        return response


app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestIDMiddleware)


# ---------------------------------------------------------------------------
# Exception handlers: every error leaves as {"error": ..., "code": ...}
# ---------------------------------------------------------------------------


def _log_error(request: Request, status_code: int, code: str, message: str) -> None:
    level = logging.ERROR if status_code >= 500 else logging.WARNING
    logger.log(
        level,
        "%s %s -> %d %s: %s [request_id=%s]",
        request.method, request.url.path, status_code, code, message,
        get_request_id(request),
    )


@app.exception_handler(AutocorrectError)
async def _autocorrect_error_handler(request: Request, exc: AutocorrectError) -> JSONResponse:
    _log_error(request, exc.status_code, exc.code, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(exc.message, exc.code),
    )


def _validation_message(exc: RequestValidationError) -> str:
    """Turn pydantic body errors into one client-facing sentence."""
    errors = exc.errors()
    if any(err.get("type") == "json_invalid" for err in errors):
        return "Request body must be valid JSON"

    fields: list[str] = []
    for err in errors:
        loc = err.get("loc", ())
        if len(loc) >= 2 and loc[0] == "body" and str(loc[1]) not in fields:
            fields.append(str(loc[1]))
    if len(fields) == 1:
        return f"{fields[0]} is required"
    if fields:
        return f"{' and '.join(fields)} are required"
    return "Request body must be a JSON object"


@app.exception_handler(RequestValidationError)
async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = _validation_message(exc)
    _log_error(request, 400, "INVALID_INPUT", message)
    return JSONResponse(status_code=400, content=error_response(message, "INVALID_INPUT"))


_HTTP_CODES = {404: "NOT_FOUND", 405: MethodNotAllowedError.code}


@app.exception_handler(StarletteHTTPException)
async def _http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    code = _HTTP_CODES.get(exc.status_code, "HTTP_ERROR")
    message = MethodNotAllowedError().message if exc.status_code == 405 else str(exc.detail)
    _log_error(request, exc.status_code, code, message)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(message, code),
        headers=getattr(exc, "headers", None),
    )


app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)


@app.exception_handler(Exception)
async def _global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled exception on %s %s [request_id=%s]",
        request.method, request.url.path, get_request_id(request),
        exc_info=True,
    )
    detail = str(exc) if settings.dev_mode else "An unknown server error occurred"
    return JSONResponse(status_code=500, content=error_response(detail, "INTERNAL_ERROR"))


# ---------------------------------------------------------------------------
# CORS
# ---------------------------------------------------------------------------

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Accept", "X-Request-ID"],
)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------

app.include_router(correct.router, prefix="/api/correct", tags=["correction"])
app.include_router(changetone.router, prefix="/api/changetone", tags=["tone"])

# ---------------------------------------------------------------------------
# System endpoints
# ---------------------------------------------------------------------------


@app.get("/health")
async def health_check() -> dict:
    """Liveness check. Reports whether the upstream key is configured."""
    return {
        "status": "healthy",
        "services": {
            "gemini_api": "ok" if settings.gemini_configured else "not_configured",
        },
    }


@app.get("/api/version")
async def version() -> dict:
    """Return build / version metadata."""
    return {
        "version": app.version,
        "title": app.title,
        "model": settings.gemini_model,
    }
