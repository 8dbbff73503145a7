"""Health & Banner — liveness probe and service banner.

Invariants:
    - GET /api/v1/health/ always returns 200 if process is up (liveness)
    - anthropic_key_configured reports presence only, never the key
"""

import logging
from fastapi import APIRouter, status

from tagscript.config import get_settings

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["health"])

SERVICE_NAME = "tagscript-api"
SERVICE_VERSION = "1.0.0"


@router.get("", status_code=status.HTTP_200_OK)
async def banner():
    return {"message": "TagScript API is running", "version": SERVICE_VERSION}


@router.get("/health/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "anthropic_key_configured": get_settings().anthropic_key_configured,
    }
