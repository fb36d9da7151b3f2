"""Application startup validation."""
import logging

from catalog_admin.gateway import GatewayError, RemoteGateway
from catalog_admin.settings import settings

logger = logging.getLogger(__name__)


def validate_settings() -> None:
    """
    Validate all required settings at startup.

    Raises:
        ValueError: If required settings are missing or invalid
    """
    logger.info(f"Validating settings for ENV={settings.ENV}")
    settings.validate_required_for_env()
    logger.info("✓ Settings validation passed")


async def check_gateway(gateway: RemoteGateway) -> bool:
    """
    Check the backend is reachable.

    An unreachable backend does not stop the application: pages surface
    load errors and /ready reports not ready until it comes back.
    """
    logger.info(f"Checking backend at {settings.APPWRITE_ENDPOINT}...")
    try:
        await gateway.ping()
    except GatewayError as e:
        logger.warning(f"✗ Backend not reachable ({e.kind.value}): {e.message}")
        return False

    logger.info("✓ Backend reachable")
    return True


async def run_startup_validation(gateway: RemoteGateway) -> None:
    """
    Run all startup validations.

    Raises:
        ValueError: If the configuration is invalid
    """
    logger.info("=" * 60)
    logger.info("Starting application startup validation")
    logger.info("=" * 60)

    try:
        validate_settings()
    except ValueError as e:
        logger.error("✗ Startup validation failed")
        logger.error(f"Error: {e}")
        logger.error("Application will not start until this is resolved.")
        raise

    if settings.GATEWAY_CHECK_ON_STARTUP:
        await check_gateway(gateway)

    logger.info("✓ Startup validation complete")
