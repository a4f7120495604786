"""Storefront API main application module.

This module initializes the FastAPI application and configures
core middleware, routers, and startup/shutdown events.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from storefront.api import (
    auth_router,
    categories_router,
    health_router,
    products_router,
    users_router,
)
from storefront.api.middleware import setup_middleware
from storefront.domain.exceptions import DomainError
from storefront.infrastructure.config import settings
from storefront.infrastructure.database import dispose_engine, init_models
from storefront.infrastructure.logging import configure_logging

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None after startup, cleanup happens after yield.
    """
    # Startup
    configure_logging(settings)
    logger.info(
        "Starting Storefront API",
        version=settings.api_version,
        debug=settings.debug,
        storage_backend=settings.storage_backend,
    )

    if settings.storage_backend == "database":
        await init_models()
        logger.info("Database tables ready")

    yield

    # Shutdown
    logger.info("Shutting down Storefront API")
    if settings.storage_backend == "database":
        await dispose_engine()


app = FastAPI(
    title="Storefront API",
    description="E-commerce catalog backend with product variants",
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

# Setup custom middleware (request ID, bearer auth, error handling)
setup_middleware(app)

# Include routers
app.include_router(health_router, tags=["Health"])
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(categories_router)
app.include_router(products_router)


# ============================================================================
# Custom Exception Handlers
# ============================================================================


def _error_body(
    request: Request, error_code: str, message: str, details
) -> dict:
    return {
        "error_code": error_code,
        "message": message,
        "details": details,
        "request_id": getattr(request.state, "request_id", None),
    }


@app.exception_handler(DomainError)
async def domain_exception_handler(request: Request, exc: DomainError):
    """Map domain errors to their HTTP status and error code."""
    logger.info(
        "Request rejected",
        path=request.url.path,
        error_code=exc.error_code,
        reason=exc.message,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(request, exc.error_code, exc.message, exc.details),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report request body and query errors field by field."""
    details = [
        {
            "field": ".".join(str(part) for part in error["loc"][1:]) or None,
            "message": error["msg"],
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=422,
        content=_error_body(request, "VALIDATION_ERROR", "Invalid request", details),
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTP exceptions with consistent format."""
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
        content=_error_body(request, error_code, message, details),
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
        content=_error_body(
            request, "INTERNAL_ERROR", "An internal error occurred", []
        ),
    )
