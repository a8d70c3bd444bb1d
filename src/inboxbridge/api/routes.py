"""
General API routes for the Inbox Bridge service.
"""

from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from inboxbridge.infrastructure import get_settings

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: str
    version: str


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Liveness check."""
    settings = get_settings()
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=settings.app_version,
    )
