"""Health check endpoints.

Provides endpoints for monitoring service health and readiness.
"""

from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from storefront.infrastructure.config import settings

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str
    service: str
    version: str
    timestamp: datetime


@router.get("/")
async def welcome() -> dict[str, str]:
    """Greeting for clients hitting the root path."""
    return {"message": "Welcome to the Storefront API"}


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Check service health.

    Returns:
        Health status with service name, version and server time.
    """
    return HealthResponse(
        status="healthy",
        service="storefront-api",
        version=settings.api_version,
        timestamp=datetime.now(timezone.utc),
    )


@router.get("/ready")
async def readiness_check() -> dict[str, str]:
    """Check if service is ready to accept requests.

    Returns:
        Readiness status.
    """
    return {"status": "ready", "storage_backend": settings.storage_backend}
