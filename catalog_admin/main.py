"""FastAPI application entrypoint."""
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI

from catalog_admin import __version__
from catalog_admin.catalog import VIEWS
from catalog_admin.gateway import AppwriteGateway, create_http_client
from catalog_admin.middleware import (
    CSRFProtectionMiddleware,
    RateLimitMiddleware,
    RequestLoggingMiddleware,
    setup_logging,
)
from catalog_admin.routers import auth_routes, health
from catalog_admin.routers.catalog import build_catalog_router
from catalog_admin.settings import settings
from catalog_admin.startup import run_startup_validation

# Configure logging before anything else
setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan.

    Opens the shared HTTP client for the backend and validates
    configuration before accepting traffic.
    """
    logger.info(f"Starting application in {settings.ENV} environment")

    app.state.http_client = create_http_client(settings)
    try:
        await run_startup_validation(AppwriteGateway(app.state.http_client, settings))
        yield
    finally:
        logger.info("Shutting down application")
        await app.state.http_client.aclose()


app = FastAPI(
    title="Product Catalog Admin",
    description="Role-gated product catalog management",
    version=__version__,
    lifespan=lifespan
)

# Last added runs first: logging wraps everything so request ids exist
app.add_middleware(CSRFProtectionMiddleware)
app.add_middleware(RateLimitMiddleware)
app.add_middleware(RequestLoggingMiddleware)

app.include_router(health.router)
app.include_router(auth_routes.router)
for view in VIEWS:
    app.include_router(build_catalog_router(view))
