from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from twangpao.core.logging import get_logger
from twangpao.domain.models.response import ApiResponse

# Initialize logger
logger = get_logger(__name__)

INVALID_REQUEST = "INVALID_REQUEST"
INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


async def handle_validation_exception(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Handle malformed request bodies.

    Args:
        request: FastAPI request object
        exc: RequestValidationError instance

    Returns:
        JSONResponse: Error envelope with a 422 status
    """
    errors = [
        {"loc": list(error["loc"]), "msg": error["msg"], "type": error["type"]}
        for error in exc.errors()
    ]
    logger.warning(
        "Request validation error",
        extra={"request_path": request.url.path, "errors": errors}
    )

    content = ApiResponse.failure(INVALID_REQUEST, "Request validation error").to_dict()
    content["status"]["error"] = {"errors": errors}
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=content
    )


async def handle_unexpected_exception(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle exceptions that escaped the route handlers.

    Args:
        request: FastAPI request object
        exc: The unhandled exception

    Returns:
        JSONResponse: Error envelope with a 500 status
    """
    logger.error(f"Unhandled exception: {str(exc)}", exc_info=exc)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ApiResponse.failure(INTERNAL_SERVER_ERROR, "An unexpected error occurred.").to_dict()
    )
