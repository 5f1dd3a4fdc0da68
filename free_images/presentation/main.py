import os
import logging
from logging.handlers import RotatingFileHandler

from fastapi import FastAPI, APIRouter
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn
from contextlib import asynccontextmanager

from free_images.core.exceptions import (
    FreeImagesError,
    free_images_exception_handler,
    general_exception_handler,
    http_exception_handler,
)
from free_images.core.middleware import (
    RateLimitMiddleware,
    RequestLoggingMiddleware,
)
from free_images.presentation.api.v1.routers import images
from free_images.presentation.api.v1.routers import health
from free_images.core.config import settings
from free_images.infrastructure.adapters.bundles.image_search import close_shared_transport


def configure_logging() -> None:
    """Log to console and to a rotating file"""
    log_dir = os.path.dirname(settings.log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
    log_handlers = [
        logging.StreamHandler(),
        RotatingFileHandler(
            settings.log_file, maxBytes=5 * 1024 * 1024, backupCount=2, encoding="utf-8"
        ),
    ]
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper()),
        format=settings.log_format,
        datefmt=settings.log_date_format,
        handlers=log_handlers,
    )
    logging.getLogger("urllib3").setLevel(logging.WARNING)


configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    logger.info("Starting Free Images API (provider: %s)...", settings.provider)
    yield
    logger.info("Shutting down Free Images API...")
    close_shared_transport()


def create_application() -> FastAPI:
    """Create and configure FastAPI application"""

    app = FastAPI(
        title=settings.api_title,
        description=settings.api_description,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        RateLimitMiddleware,
        calls=settings.max_requests_per_minute,
        period=60,
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(FreeImagesError, free_images_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    # Include API routers under versioned prefix
    api_v1 = APIRouter(prefix="/api/v1")
    api_v1.include_router(images.router, tags=["images"])
    api_v1.include_router(health.router)
    app.include_router(api_v1)

    return app


# Create application instance
app = create_application()

if __name__ == "__main__":
    dev_mode = os.getenv("DEV_MODE", "true").lower() == "true"
    uvicorn.run(
        "free_images.presentation.main:app",
        host=settings.host,
        port=settings.port,
        reload=dev_mode,
    )
