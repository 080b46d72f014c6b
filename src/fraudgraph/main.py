"""
FraudGraph - Entity-Relationship Graph for Users and Transactions

FastAPI application entry point.
"""

import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
from starlette.middleware.base import BaseHTTPMiddleware

from fraudgraph import __version__
from fraudgraph.config import settings
from fraudgraph.errors import NotFoundError, UpstreamStoreError, ValidationError
from fraudgraph.graph.client import create_graph_client

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# Rate limiter
limiter = Limiter(key_func=get_remote_address, default_limits=[
    f"{settings.rate_limit_requests}/{settings.rate_limit_window_seconds}seconds"
])


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every request with its id, status and duration."""

    async def dispatch(self, request: Request, call_next) -> Response:
        start_time = time.time()

        request_id = request.headers.get("X-Request-ID", f"req_{int(time.time() * 1000)}")

        logger.info(
            f"Request: {request.method} {request.url.path} "
            f"[{request_id}] from {request.client.host if request.client else 'unknown'}"
        )

        response = await call_next(request)

        process_time = time.time() - start_time
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = str(process_time)

        logger.info(
            f"Response: {request.method} {request.url.path} "
            f"[{request_id}] status={response.status_code} time={process_time:.3f}s"
        )

        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the graph store and install its schema; failure aborts startup."""
    logger.info(f"Starting FraudGraph with {settings.graph_backend} backend...")

    graph = create_graph_client(
        settings.graph_backend,
        uri=settings.neo4j_uri,
        user=settings.neo4j_user,
        password=settings.neo4j_password,
        database=settings.neo4j_database,
        max_connection_pool_size=settings.neo4j_max_connection_pool_size,
        connection_timeout=settings.neo4j_connection_timeout,
    )
    await graph.connect_with_retry(
        max_attempts=settings.schema_setup_max_attempts,
        backoff_base=settings.schema_setup_backoff_base,
    )
    app.state.graph = graph

    logger.info("FraudGraph started successfully")

    yield

    logger.info("Shutting down FraudGraph...")
    await graph.close()
    logger.info("FraudGraph shutdown complete")


app = FastAPI(
    title="FraudGraph",
    description="Relationship graph of users and transactions for fraud investigation",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if not settings.is_production else None,
    redoc_url="/redoc" if not settings.is_production else None,
    openapi_url="/openapi.json" if not settings.is_production else None,
)

# Rate limiting
app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)

# Request logging middleware
app.add_middleware(RequestLoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "X-Request-ID"],
    expose_headers=["X-Request-ID", "X-Process-Time"],
    max_age=600,
)


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Handle rate limit exceeded errors."""
    return JSONResponse(
        status_code=429,
        content={
            "error": "Rate limit exceeded",
            "details": "Too many requests. Please try again later.",
            "retry_after": exc.detail,
        },
        headers={"Retry-After": str(exc.detail)},
    )


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"error": exc.message, "details": {"field": exc.field}},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed parameters are reported like any other invalid input."""
    return JSONResponse(
        status_code=400,
        content={
            "error": "Invalid request",
            "details": [
                {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg")}
                for err in exc.errors()
            ],
        },
    )


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=404,
        content={
            "error": str(exc),
            "details": {"kind": exc.kind, "id": exc.entity_id},
        },
    )


@app.exception_handler(UpstreamStoreError)
async def upstream_error_handler(request: Request, exc: UpstreamStoreError) -> JSONResponse:
    logger.error(f"Graph store error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=502,
        content={"error": exc.message, "details": exc.detail},
    )


@app.get("/health")
async def health_check(request: Request) -> dict[str, Any]:
    """
    Health check endpoint.

    Returns the status of the graph store with node and edge counts.
    """
    health_status: dict[str, Any] = {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": __version__,
        "services": {},
    }

    try:
        stats = await request.app.state.graph.get_statistics()
        health_status["services"]["graph"] = {
            "status": "healthy",
            "backend": settings.graph_backend,
            **stats,
        }
    except UpstreamStoreError as e:
        health_status["services"]["graph"] = {"status": "unhealthy", "error": str(e)}
        health_status["status"] = "degraded"

    return health_status


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with API information."""
    return {
        "name": "FraudGraph",
        "description": "Relationship graph of users and transactions",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
    }


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle uncaught exceptions securely."""
    logger.exception(f"Unhandled exception: {exc}")

    if settings.is_production:
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "details": "An unexpected error occurred.",
            },
        )

    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "details": str(exc),
            "type": type(exc).__name__,
        },
    )


# Import and include routers
from fraudgraph.api.routes import (  # noqa: E402
    analytics_router,
    export_router,
    graph_router,
    relationships_router,
    transactions_router,
    users_router,
)

app.include_router(users_router, prefix="/api/v1/users", tags=["users"])
app.include_router(transactions_router, prefix="/api/v1/transactions", tags=["transactions"])
app.include_router(relationships_router, prefix="/api/v1/relationships", tags=["relationships"])
app.include_router(analytics_router, prefix="/api/v1/analytics", tags=["analytics"])
app.include_router(export_router, prefix="/api/v1/export", tags=["export"])
app.include_router(graph_router, prefix="/api/v1/graph", tags=["graph"])
