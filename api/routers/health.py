"""
Health check endpoints.
"""

from fastapi import APIRouter
from typing import Dict, Any
from datetime import datetime, timezone

from api.models import HealthResponse
from treatment_network import __version__

router = APIRouter()


@router.get("/", response_model=Dict[str, Any])
async def root():
    """Root endpoint - API information"""
    return {
        "name": "Treatment Network API",
        "version": __version__,
        "status": "running",
        "endpoints": {
            "health": "/health",
            "geometry": "/api/v1/network/geometry",
            "ranking": "/api/v1/network/ranking",
        },
    }


@router.get("/health", response_model=HealthResponse)
async def health_check():
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=__version__,
    )
