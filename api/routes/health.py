"""
Health Check Route

Simple health check endpoint for liveness checks.
"""

from fastapi import APIRouter, Depends

from api.deps import get_runtime_config
from api.models.responses import HealthResponse
from core.config.runtime import RuntimeConfig


router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(config: RuntimeConfig = Depends(get_runtime_config)) -> HealthResponse:
    """
    Health check endpoint.

    Reports whether the upstream records API is configured.
    """
    return HealthResponse(
        ok=True,
        upstream_configured=config.upstream.configured,
    )


@router.get("/", response_model=HealthResponse)
async def root(config: RuntimeConfig = Depends(get_runtime_config)) -> HealthResponse:
    """
    Root endpoint - same as health check.
    """
    return HealthResponse(
        ok=True,
        upstream_configured=config.upstream.configured,
    )
