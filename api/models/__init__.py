"""API response models."""

from api.models.responses import (
    HealthResponse,
    ErrorDetail,
    ErrorResponse,
)

__all__ = [
    "HealthResponse",
    "ErrorDetail",
    "ErrorResponse",
]
