"""Health check endpoints."""
from fastapi import APIRouter, Depends, Response, status

from catalog_admin.dependencies import get_gateway
from catalog_admin.gateway import GatewayError, RemoteGateway

router = APIRouter(tags=["health"])


@router.get("/health")
async def health():
    """
    Basic health check - process is alive.

    Returns 200 if the application is running.
    """
    return {"status": "healthy"}


@router.get("/ready")
async def ready(response: Response, gateway: RemoteGateway = Depends(get_gateway)):
    """
    Readiness check - verifies the backend-as-a-service is reachable.

    Returns 200 if ready to accept traffic, 503 if not ready.
    """
    try:
        await gateway.ping()
    except GatewayError as e:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return {
            "status": "not_ready",
            "backend": "unreachable",
            "error": e.kind.value,
        }

    return {"status": "ready", "backend": "reachable"}
