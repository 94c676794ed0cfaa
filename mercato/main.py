"""Mercato catalog API main application module.

This module initializes the FastAPI application and configures
logging, middleware, routers, and exception handlers.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from mercato.api.health import router as health_router
from mercato.api.middleware import error_body, setup_middleware
from mercato.api.products import router as products_router
from mercato.domain.exceptions import ConcurrencyError
from mercato.infrastructure.config import settings
from mercato.infrastructure.logging import configure_logging

configure_logging(settings)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None after startup, cleanup happens after yield.
    """
    logger.info(
        "Starting Mercato catalog API",
        version=settings.api_version,
        debug=settings.debug,
        repository_backend=settings.repository_backend,
    )

    yield

    if settings.repository_backend == "database":
        from mercato.infrastructure.database import get_engine

        await get_engine().dispose()
    logger.info("Shutting down Mercato catalog API")


app = FastAPI(
    title="Mercato Catalog API",
    description="Seller product lifecycle, bulk price/stock updates and catalog export",
    version=settings.api_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware (must be added before custom middleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Setup custom middleware (request ID, API key auth, error handling)
setup_middleware(app)

# Include routers
app.include_router(health_router, tags=["Health"])
app.include_router(products_router)


# ============================================================================
# Custom Exception Handlers
# ============================================================================


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTP exceptions with consistent format."""
    request_id = getattr(request.state, "request_id", None)

    detail = exc.detail
    if isinstance(detail, dict):
        error_code = detail.get("error_code", "ERROR")
        message = detail.get("message", str(detail))
        details = detail.get("details", [])
    else:
        error_code = "ERROR"
        message = str(detail)
        details = []

    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(error_code, message, details, request_id),
    )


@app.exception_handler(ConcurrencyError)
async def concurrency_error_handler(request: Request, exc: ConcurrencyError):
    """Report a lost optimistic-concurrency race as 409 Conflict."""
    logger.warning("Concurrent modification", path=request.url.path, **exc.details)
    return JSONResponse(
        status_code=409,
        content=error_body(
            "CONCURRENT_MODIFICATION",
            exc.message,
            request_id=getattr(request.state, "request_id", None),
        ),
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    """Handle uncaught exceptions with consistent format."""
    logger.exception(
        "Unhandled exception in handler",
        path=request.url.path,
        method=request.method,
        error=str(exc),
    )

    return JSONResponse(
        status_code=500,
        content=error_body(
            "INTERNAL_ERROR",
            "An internal error occurred",
            request_id=getattr(request.state, "request_id", None),
        ),
    )
