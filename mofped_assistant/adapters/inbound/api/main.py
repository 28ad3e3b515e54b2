"""FastAPI application for the MoFPED Help Assistant API."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .... import __version__
from ....common.exception_handler import (
    error_body,
    get_http_status_code,
    log_exception,
)
from ....config.logging import setup_logging
from ....config.settings import settings
from ....core.domain.exceptions import AssistantError, RateLimitExceededError
from .routers import ask, health

logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
    "X-Frame-Options": "SAMEORIGIN",
    "X-Content-Type-Options": "nosniff",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Permissions-Policy": "camera=(), microphone=(), geolocation=()",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging on startup."""
    setup_logging(settings.log_level, json_format=settings.log_json)
    logger.info("MoFPED Help Assistant API starting up...")
    logger.info("API docs available at /docs")
    logger.info("Debug mode: %s", "ENABLED" if settings.debug else "DISABLED")
    yield
    logger.info("MoFPED Help Assistant API shutting down...")


app = FastAPI(
    title="MoFPED Help Assistant API",
    description=(
        "Answers questions about Uganda's Ministry of Finance, Planning and Economic "
        "Development using documents and pages published on finance.go.ug."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    response = await call_next(request)
    for name, value in SECURITY_HEADERS.items():
        response.headers.setdefault(name, value)
    return response


app.include_router(health.router)
app.include_router(ask.router)


# =============================================================================
# Global Exception Handlers
# =============================================================================


@app.exception_handler(AssistantError)
async def assistant_error_handler(request: Request, exc: AssistantError) -> JSONResponse:
    """Answer a deliberate AssistantError with its code and ``exc.http_status``.

    Client errors (validation, rate limiting) are logged at WARNING.
    """
    status_code = get_http_status_code(exc)
    log_exception(
        exc,
        level=logging.WARNING if status_code < 500 else logging.ERROR,
        path=str(request.url.path),
        method=request.method,
    )

    headers = None
    if isinstance(exc, RateLimitExceededError):
        headers = {"Retry-After": str(exc.context.get("retry_after", 60))}

    return JSONResponse(
        status_code=status_code,
        content=error_body(exc, include_trace=settings.debug),
        headers=headers,
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort for anything that escaped the routers."""
    log_exception(exc, path=str(request.url.path), method=request.method)

    return JSONResponse(
        status_code=get_http_status_code(exc),
        content=error_body(exc, include_trace=settings.debug),
    )


# Export for uvicorn
__all__ = ["app"]
