"""
FastAPI Application Setup

Main entry point for the Report Service API.

Responsibility:
    - FastAPI app initialization
    - Router registration (excel)
    - CORS middleware configuration
    - Global exception handlers (domain failure kinds -> HTTP status)
    - Request logging middleware
    - Health check endpoint

Architecture Notes:
    - Part of API Layer (Presentation)
    - Entry point for HTTP server (uvicorn)
    - Centralizes cross-cutting concerns (logging, CORS, error handling)
    - No business logic - pure HTTP orchestration

Contains:
    - create_app() factory function
    - Global exception handlers
    - Request logging middleware
    - Health check endpoint: GET /health
"""

import asyncio
import logging
import os
import time
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from report_service.api.dependencies import get_metadata_backend
from report_service.api.routers import reports
from report_service.api.schemas.common import ErrorResponse
from report_service.domain.shared.exceptions import (
    ArtifactGenerationFailedError,
    ArtifactNotFoundError,
    DomainException,
    InvalidPartitionKeyError,
    MetadataUnavailableError,
    OrphanedArtifactError,
    RowShapeMismatchError,
    StorageUnavailableError,
)
from report_service.infrastructure.persistence.redis.connection import (
    close_connections,
    health_check as redis_health_check,
)

# Load .env before anything reads the environment
load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

API_VERSION = "0.1.0"


# ============================================================================
# RESPONSE MODELS
# ============================================================================


class HealthCheckResponse(BaseModel):
    """
    Health check response model.

    Attributes:
        status: "ok", or "degraded" when the Redis metadata backend is unreachable
        version: API version
        timestamp: Unix timestamp of health check
        metadata_backend: Configured metadata backend ("memory" or "redis")
    """

    status: str = "ok"
    version: str = API_VERSION
    timestamp: float
    metadata_backend: str


# ============================================================================
# MIDDLEWARE
# ============================================================================


async def request_logging_middleware(request: Request, call_next):
    """
    Request logging middleware.

    Logs every request with method, path, status code and duration.

    Logging Format:
        INFO: "Incoming request: POST /api/excel"
        INFO: "Request completed: POST /api/excel - 201 - 0.123s"
    """
    logger.info(f"Incoming request: {request.method} {request.url.path}")

    start_time = time.time()
    response = await call_next(request)
    duration = time.time() - start_time

    logger.info(
        f"Request completed: {request.method} {request.url.path} - "
        f"{response.status_code} - {duration:.3f}s"
    )
    return response


# ============================================================================
# EXCEPTION HANDLERS
# ============================================================================


# Checked in order; subclasses must come before their base classes
DOMAIN_ERROR_MAPPING: list[tuple[type[DomainException], int, str]] = [
    (InvalidPartitionKeyError, status.HTTP_400_BAD_REQUEST, "INVALID_PARTITION_KEY"),
    (RowShapeMismatchError, status.HTTP_400_BAD_REQUEST, "ROW_SHAPE_MISMATCH"),
    (ArtifactNotFoundError, status.HTTP_404_NOT_FOUND, "ARTIFACT_NOT_FOUND"),
    (
        ArtifactGenerationFailedError,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "ARTIFACT_GENERATION_FAILED",
    ),
    (StorageUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE, "STORAGE_UNAVAILABLE"),
    (OrphanedArtifactError, status.HTTP_503_SERVICE_UNAVAILABLE, "ORPHANED_ARTIFACT"),
    (
        MetadataUnavailableError,
        status.HTTP_503_SERVICE_UNAVAILABLE,
        "METADATA_UNAVAILABLE",
    ),
]

DETAIL_ATTRIBUTES = ("file_id", "partition_key", "row_index", "storage_key")


def resolve_domain_error(exc: DomainException) -> tuple[int, str]:
    """
    Map a domain exception to (HTTP status code, error code).

    Unmapped DomainException subclasses are internal errors (500).

    Examples:
        >>> resolve_domain_error(ArtifactNotFoundError("abc"))
        (404, 'ARTIFACT_NOT_FOUND')
    """
    for exception_type, status_code, error_code in DOMAIN_ERROR_MAPPING:
        if isinstance(exc, exception_type):
            return status_code, error_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR, "DOMAIN_ERROR"


def _error_details(exc: DomainException) -> Dict[str, Any]:
    details: Dict[str, Any] = {"exception_type": exc.__class__.__name__}
    for attribute in DETAIL_ATTRIBUTES:
        value: Optional[Any] = getattr(exc, attribute, None)
        if value is not None:
            details[attribute] = value
    return details


async def domain_exception_handler(request: Request, exc: DomainException):
    """
    Global exception handler for domain layer exceptions.

    Mapping:
        - InvalidPartitionKeyError -> 400 Bad Request
        - RowShapeMismatchError -> 400 Bad Request
        - ArtifactNotFoundError -> 404 Not Found
        - ArtifactGenerationFailedError -> 500 Internal Server Error
        - StorageUnavailableError -> 503 Service Unavailable
        - MetadataUnavailableError (incl. OrphanedArtifactError) -> 503
        - Other DomainException -> 500 Internal Server Error

    Returns:
        JSONResponse with ErrorResponse body
    """
    status_code, error_code = resolve_domain_error(exc)

    error_response = ErrorResponse(
        code=error_code,
        message=str(exc),
        details=_error_details(exc),
    )

    log_message = (
        f"Domain exception: {exc.__class__.__name__} - {str(exc)} - "
        f"Request: {request.method} {request.url.path}"
    )
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(log_message)
    else:
        logger.warning(log_message)

    return JSONResponse(status_code=status_code, content=error_response.model_dump())


async def generic_exception_handler(request: Request, exc: Exception):
    """
    Global exception handler for unexpected exceptions.

    Converts any unhandled exception to 500 and logs the full traceback.
    """
    error_response = ErrorResponse(
        code="INTERNAL_SERVER_ERROR",
        message="An unexpected error occurred",
        details={"error": str(exc), "type": exc.__class__.__name__},
    )

    logger.error(
        f"Unexpected error: {exc.__class__.__name__} - {str(exc)} - "
        f"Request: {request.method} {request.url.path}",
        exc_info=True,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response.model_dump(),
    )


# ============================================================================
# APP FACTORY
# ============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    close_connections()


def create_app() -> FastAPI:
    """
    FastAPI application factory.

    Configuration:
        - Title: Report Service API
        - CORS: Allow all origins (development mode)
        - Routers: /api/excel
        - Health: GET /health

    Returns:
        Configured FastAPI application instance

    Usage:
        >>> app = create_app()
        >>> # uvicorn report_service.api.main:app --reload
    """
    app = FastAPI(
        title="Report Service API",
        version=API_VERSION,
        description=(
            "Generate Excel reports from tabular data, optionally split into "
            "one sheet per column value. Download, list and delete reports."
        ),
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Production: restrict to specific origins
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.middleware("http")(request_logging_middleware)

    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    app.include_router(reports.router, prefix="/api")

    @app.get(
        "/health",
        response_model=HealthCheckResponse,
        status_code=status.HTTP_200_OK,
        summary="Health check endpoint",
        tags=["health"],
    )
    async def health_check() -> HealthCheckResponse:
        """
        Health check endpoint.

        Pings Redis when it is the metadata backend; reports "degraded"
        instead of failing when it does not answer.
        """
        backend = get_metadata_backend()
        health_status = "ok"
        if backend == "redis" and not await asyncio.to_thread(redis_health_check):
            health_status = "degraded"

        return HealthCheckResponse(
            status=health_status,
            timestamp=time.time(),
            metadata_backend=backend,
        )

    logger.info("FastAPI application created successfully")
    logger.info("Registered routers: /api/excel")

    return app


# ============================================================================
# APP INSTANCE (for uvicorn)
# ============================================================================

# Usage: uvicorn report_service.api.main:app --reload
app = create_app()
