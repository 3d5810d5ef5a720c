from fastapi import APIRouter, status
from pydantic import BaseModel

from twangpao import __version__
from twangpao.core.config import get_settings
from twangpao.core.logging import get_logger

# Initialize router and logger
health_router = APIRouter()
logger = get_logger(__name__)


class HealthStatus(BaseModel):
    """Basic health status response model."""
    status: str
    version: str = __version__
    service: str


@health_router.get(
    "",
    response_model=HealthStatus,
    status_code=status.HTTP_200_OK,
    summary="Basic health check",
    description="Returns basic health status of the service."
)
async def get_health() -> HealthStatus:
    """
    Basic health check endpoint.

    Returns:
        HealthStatus: Basic service health status
    """
    logger.debug("Health check requested")
    return HealthStatus(status="ok", service=get_settings().PROJECT_NAME)
