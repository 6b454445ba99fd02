"""
FastAPI Application Setup

Entry point for the artist matching HTTP API (uvicorn src.api.main:app).

Responsibility:
    - App factory with router registration (matching, jobs, strategies)
    - Startup/shutdown lifecycle (strategy summary, Redis pool cleanup)
    - Domain exception -> HTTP status mapping in the ErrorResponse shape
    - Request logging with per-request timing
    - GET /health

Architecture Notes:
    - Part of API Layer (Presentation)
    - No ranking logic here; routers delegate to Application Layer use cases
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from src.api.dependencies import get_matching_config, get_strategy_registry
from src.api.routers import jobs_router, matching_router, strategies_router
from src.api.schemas.common import ErrorResponse
from src.domain.shared.exceptions import (
    DomainException,
    InvalidCandidateError,
    InvalidInputError,
    InvalidRankCommandError,
    RequestNotFoundError,
)
from src.infrastructure.persistence.redis import close_connections

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

API_VERSION = "0.1.0"

# First match wins, so subclasses go before their parents
DOMAIN_ERROR_STATUS: tuple[tuple[type[DomainException], int, str], ...] = (
    (RequestNotFoundError, status.HTTP_404_NOT_FOUND, "REQUEST_NOT_FOUND"),
    (InvalidInputError, status.HTTP_400_BAD_REQUEST, "INVALID_INPUT"),
)


class HealthCheckResponse(BaseModel):
    status: str = "ok"
    version: str = API_VERSION
    timestamp: float


# ============================================================================
# LIFECYCLE
# ============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    registry = get_strategy_registry()
    config = get_matching_config()
    logger.info(
        f"Artist Match API {API_VERSION} starting: strategies={registry.names()}, "
        f"confidence_floor={config.confidence_floor}, "
        f"default_timeout={config.default_strategy_timeout_s}s"
    )
    yield
    close_connections()
    logger.info("Artist Match API stopped")


# ============================================================================
# MIDDLEWARE
# ============================================================================


async def log_requests(request: Request, call_next):
    """
    Log method, path, status and duration; expose the duration as
    X-Process-Time (seconds).
    """
    started = time.perf_counter()
    logger.info(f"Incoming request: {request.method} {request.url.path}")

    response = await call_next(request)

    elapsed = time.perf_counter() - started
    response.headers["X-Process-Time"] = f"{elapsed:.4f}"
    logger.info(
        f"Request completed: {request.method} {request.url.path} - "
        f"{response.status_code} - {elapsed:.3f}s"
    )
    return response


# ============================================================================
# EXCEPTION HANDLERS
# ============================================================================


def classify_domain_error(exc: DomainException) -> tuple[int, str]:
    """
    HTTP status and error code for a domain exception.

    Unlisted domain exceptions answer 400 with a code derived from the
    class name (NoQuorumError -> "NOQUORUM").
    """
    for exc_type, status_code, code in DOMAIN_ERROR_STATUS:
        if isinstance(exc, exc_type):
            return status_code, code
    return status.HTTP_400_BAD_REQUEST, exc.__class__.__name__.replace("Error", "").upper()


def error_details(exc: DomainException) -> dict[str, Any]:
    details: dict[str, Any] = {"exception_type": exc.__class__.__name__}
    if isinstance(exc, InvalidInputError) and exc.field_name:
        details["field"] = exc.field_name
    if isinstance(exc, InvalidCandidateError) and exc.candidate_id:
        details["candidate_id"] = exc.candidate_id
    if isinstance(exc, InvalidRankCommandError):
        details["errors"] = exc.errors
    if isinstance(exc, RequestNotFoundError) and exc.request_id:
        details["request_id"] = exc.request_id
    return details


async def handle_domain_exception(request: Request, exc: DomainException) -> JSONResponse:
    status_code, code = classify_domain_error(exc)
    logger.warning(
        f"{request.method} {request.url.path} -> {status_code} {code}: {exc}"
    )
    body = ErrorResponse(code=code, message=str(exc), details=error_details(exc))
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def handle_unexpected_exception(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled {exc.__class__.__name__} on {request.method} {request.url.path}: {exc}",
        exc_info=True,
    )
    body = ErrorResponse(
        code="INTERNAL_SERVER_ERROR",
        message="An unexpected error occurred",
        details={"error": str(exc), "type": exc.__class__.__name__},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body.model_dump()
    )


# ============================================================================
# APP FACTORY
# ============================================================================


def create_app() -> FastAPI:
    """
    Build the FastAPI application.

    Routes:
        /api/matching/*, /api/jobs/*, /api/strategies, /health
    """
    app = FastAPI(
        title="Artist Match API",
        version=API_VERSION,
        description=(
            "Ranks tattoo artists against a customer request with a "
            "multi-strategy consensus and explains every match."
        ),
        lifespan=lifespan,
    )

    # Development default; restrict origins per deployment
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(log_requests)

    app.add_exception_handler(DomainException, handle_domain_exception)
    app.add_exception_handler(Exception, handle_unexpected_exception)

    for router in (matching_router, jobs_router, strategies_router):
        app.include_router(router, prefix="/api")

    @app.get("/health", response_model=HealthCheckResponse, tags=["health"])
    async def health() -> HealthCheckResponse:
        return HealthCheckResponse(timestamp=time.time())

    return app


app = create_app()
