"""
System Router - Health check and API information endpoints
"""

from fastapi import APIRouter
from datetime import datetime
import logging

from ai_gateway.core.config import settings
from ai_gateway.schemas import HealthResponse, SystemInfoResponse
from ai_gateway.services.detection_service import AISelector

logger = logging.getLogger(__name__)

router = APIRouter(tags=["System"])


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint

    Reports the API status and which provider credentials are configured.
    No provider is contacted.
    """
    services = {"api": "healthy"}
    services.update(settings.configured_providers())

    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "services": services,
        "version": settings.API_VERSION
    }


@router.get("/", response_model=SystemInfoResponse, tags=["Root"])
async def root():
    """
    Root endpoint with API information

    Returns the available endpoints, the accepted `aiToUse` selectors
    and the active glossary strategy.
    """
    return {
        "message": settings.API_TITLE,
        "version": settings.API_VERSION,
        "endpoints": {
            "translate": "/api/translate (POST) - Translate text with an optional glossary",
            "detect": "/api/detect (POST) - Detect items in an image",
            "measurements": "/api/measurements (POST) - Estimate measurements of items in an image",
            "retrieval": "/api/retrieval (POST) - Answer a question about a PDF",
            "values": "/api/values (POST) - Extract field values from an image",
            "health": "/health (GET) - API health check"
        },
        "providers": [selector.value for selector in AISelector],
        "glossary_strategy": settings.GLOSSARY_STRATEGY
    }
