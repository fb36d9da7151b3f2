"""Remote gateway to the backend-as-a-service."""
from .base import RemoteGateway
from .client import AppwriteGateway, create_http_client
from .errors import (
    AuthenticationError,
    ErrorKind,
    GatewayError,
    InvalidRequestError,
    NetworkError,
    NotFoundError,
    PermissionDeniedError,
)

__all__ = [
    "RemoteGateway",
    "AppwriteGateway",
    "create_http_client",
    "ErrorKind",
    "GatewayError",
    "AuthenticationError",
    "PermissionDeniedError",
    "NotFoundError",
    "InvalidRequestError",
    "NetworkError",
]
