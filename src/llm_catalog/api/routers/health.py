"""Health check router

Provides health check endpoints for monitoring and service discovery.

Endpoints:
- GET /health: Service health status and snapshot size

Health Check Philosophy:
- Simple status indication for monitoring systems
- An empty catalog is still healthy; refresh is a separate concern
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from ...config import settings
from ...domain.registry import ModelRegistry
from ..contracts import HealthResponse
from ..deps import get_model_registry

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(
    registry: Annotated[ModelRegistry, Depends(get_model_registry)],
) -> HealthResponse:
    """API health check"""
    return HealthResponse(status="healthy", service=settings.app_name, models_loaded=len(registry))
