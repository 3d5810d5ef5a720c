from fastapi import HTTPException, Request, status

from twangpao.core.logging import get_logger
from twangpao.services.redeem_service import RedeemService

# Initialize logger
logger = get_logger(__name__)


async def get_redeem_service(request: Request) -> RedeemService:
    """
    Dependency for providing the redeem service.

    The service is built once when the application starts and stored on
    ``app.state``.

    Args:
        request: Incoming request

    Returns:
        RedeemService: The shared service instance

    Raises:
        HTTPException: If the application has not finished starting up
    """
    service = getattr(request.app.state, "redeem_service", None)
    if service is None:
        logger.error("Redeem service requested before startup completed")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Redeem service is not ready"
        )
    return service
