import time
import uuid
from typing import Callable, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from twangpao.api.error_handlers import handle_unexpected_exception, handle_validation_exception
from twangpao.core.config import get_settings, load_env_file
from twangpao.core.logging import configure_logging, get_logger, set_correlation_id
from twangpao.services.redeem_service import RedeemService


# Load environment variables and configure logging early
load_env_file()
configure_logging()
logger = get_logger(__name__)


def create_application(redeem_service: Optional[RedeemService] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        redeem_service: Optional prebuilt service. When omitted the service is
            built from settings at startup and closed at shutdown.

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        docs_url=f"{settings.API_V1_STR}/docs",
        redoc_url=f"{settings.API_V1_STR}/redoc",
        debug=settings.DEBUG
    )
    app.state.redeem_service = redeem_service

    configure_middleware(app)
    handle_exceptions(app)
    register_routers(app)

    @app.on_event("startup")
    async def startup_event():
        logger.info("Starting up TW Angpao Adaptor")
        if app.state.redeem_service is None:
            app.state.redeem_service = RedeemService.from_settings(get_settings())
            app.state.owns_redeem_service = True

    @app.on_event("shutdown")
    async def shutdown_event():
        logger.info("Shutting down TW Angpao Adaptor")
        if getattr(app.state, "owns_redeem_service", False):
            await app.state.redeem_service.aclose()
            app.state.redeem_service = None

    return app


def configure_middleware(app: FastAPI) -> None:
    """
    Configure middleware components for the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    settings = get_settings()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def add_correlation_id(request: Request, call_next: Callable):
        correlation_id = set_correlation_id(request.headers.get("X-Correlation-ID"))
        start_time = time.time()

        response = await call_next(request)
        response.headers["X-Correlation-ID"] = correlation_id

        process_time = time.time() - start_time
        logger.info(
            "Request completed",
            extra={
                "request_path": request.url.path,
                "method": request.method,
                "status_code": response.status_code,
                "process_time_ms": round(process_time * 1000, 2)
            }
        )
        return response


def handle_exceptions(app: FastAPI) -> None:
    """
    Configure global exception handlers for the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(RequestValidationError, handle_validation_exception)
    app.add_exception_handler(Exception, handle_unexpected_exception)


def register_routers(app: FastAPI) -> None:
    """
    Register API routers with the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    settings = get_settings()

    # Import routers here to avoid circular imports
    from twangpao.api.routes import health_router, redeem_router

    app.include_router(
        health_router,
        prefix=f"{settings.API_V1_STR}/health",
        tags=["Health"]
    )

    app.include_router(
        redeem_router,
        prefix=f"{settings.API_V1_STR}/redeem",
        tags=["Redeem"]
    )


app = create_application()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("twangpao.main:app", host="0.0.0.0", port=8000, reload=True)
