"""API middleware for the storefront.

Provides:
- Request ID correlation
- Bearer token authentication for write endpoints
- Error handling
"""

import time
from typing import Callable
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from storefront.domain.exceptions import AuthenticationError
from storefront.infrastructure.security import get_token_issuer

logger = structlog.get_logger()


# ============================================================================
# Request ID Middleware
# ============================================================================


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Middleware to add request ID for correlation.

    Generates or extracts a request ID and adds it to:
    - Request state for access in handlers
    - Response headers for client correlation
    - Log context for tracing
    """

    HEADER_NAME = "X-Request-ID"

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        """Process request with correlation ID.

        Args:
            request: Incoming request.
            call_next: Next middleware/handler.

        Returns:
            Response with request ID header.
        """
        request_id = request.headers.get(self.HEADER_NAME) or str(uuid4())
        request.state.request_id = request_id

        structlog.contextvars.bind_contextvars(request_id=request_id)

        start_time = time.perf_counter()
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

        try:
            response = await call_next(request)
            status_code = response.status_code
        finally:
            duration_ms = (time.perf_counter() - start_time) * 1000

            logger.info(
                "Request completed",
                method=request.method,
                path=request.url.path,
                status_code=status_code,
                duration_ms=round(duration_ms, 2),
            )

            structlog.contextvars.unbind_contextvars("request_id")

        response.headers[self.HEADER_NAME] = request_id

        return response


# ============================================================================
# Bearer Token Authentication Middleware
# ============================================================================


# Methods that never need a token on catalog paths
SAFE_METHODS = {"GET", "HEAD", "OPTIONS"}

# Catalog paths that are public for reads and protected for writes
CATALOG_PREFIXES = ("/products", "/categories")

# Paths that always require a token
PROTECTED_PREFIXES = ("/users",)


def requires_auth(method: str, path: str) -> bool:
    """Decide whether a request must carry a bearer token.

    Args:
        method: HTTP method.
        path: Request path.

    Returns:
        True for writes under the catalog paths and anything under /users.
    """
    path = path.rstrip("/") or "/"
    if any(path == p or path.startswith(p + "/") for p in PROTECTED_PREFIXES):
        return True
    if method.upper() in SAFE_METHODS:
        return False
    return any(path == p or path.startswith(p + "/") for p in CATALOG_PREFIXES)


def _unauthorized(request: Request, error_code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={
            "error_code": error_code,
            "message": message,
            "details": [],
            "request_id": getattr(request.state, "request_id", None),
        },
        headers={"WWW-Authenticate": "Bearer"},
    )


class BearerAuthMiddleware(BaseHTTPMiddleware):
    """Middleware for access token authentication.

    Validates the Authorization header carries a valid access token.
    Supports Bearer token format: "Authorization: Bearer <token>"
    """

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        """Validate the access token for protected endpoints.

        Args:
            request: Incoming request.
            call_next: Next middleware/handler.

        Returns:
            Response or 401 error.
        """
        path = request.url.path
        if not requires_auth(request.method, path):
            return await call_next(request)

        auth_header = request.headers.get("Authorization")

        if not auth_header:
            logger.warning(
                "Missing authorization header",
                path=path,
                method=request.method,
            )
            return _unauthorized(request, "UNAUTHORIZED", "No token provided")

        parts = auth_header.split(" ", 1)
        if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1].strip():
            logger.warning(
                "Invalid authorization format",
                path=path,
                method=request.method,
            )
            return _unauthorized(
                request,
                "UNAUTHORIZED",
                "Invalid Authorization header format. Use 'Bearer <token>'",
            )

        try:
            claims = get_token_issuer().decode(parts[1].strip())
        except AuthenticationError as e:
            logger.warning(
                "Token rejected",
                path=path,
                method=request.method,
                reason=e.error_code,
            )
            return _unauthorized(request, e.error_code, e.message)

        request.state.user = claims

        return await call_next(request)


# ============================================================================
# Error Handling Middleware
# ============================================================================


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Middleware for consistent error handling.

    Catches unhandled exceptions and returns standardized error responses.
    """

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        """Handle errors uniformly.

        Args:
            request: Incoming request.
            call_next: Next middleware/handler.

        Returns:
            Response or error response.
        """
        try:
            return await call_next(request)
        except Exception as e:
            request_id = getattr(request.state, "request_id", None)

            logger.exception(
                "Unhandled exception",
                path=request.url.path,
                method=request.method,
                error=str(e),
            )

            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "error_code": "INTERNAL_ERROR",
                    "message": "An internal error occurred",
                    "details": [],
                    "request_id": request_id,
                },
            )


# ============================================================================
# Middleware Setup
# ============================================================================


def setup_middleware(app: FastAPI) -> None:
    """Configure all middleware for the application.

    Middleware is added in reverse order (last added = first executed).

    Args:
        app: FastAPI application instance.
    """
    # Error handling (innermost - wraps the route handlers)
    app.add_middleware(ErrorHandlerMiddleware)

    # Access token authentication
    app.add_middleware(BearerAuthMiddleware)

    # Request ID correlation (outermost - every response carries the ID)
    app.add_middleware(RequestIdMiddleware)
