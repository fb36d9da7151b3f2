"""Error taxonomy for calls to the backend-as-a-service."""
from enum import Enum
from typing import Optional

import httpx


class ErrorKind(str, Enum):
    """Coarse classification used to pick user-facing messages."""

    AUTHENTICATION = "authentication"
    PERMISSION = "permission"
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    NETWORK = "network"


class GatewayError(Exception):
    """Base error for a failed gateway call."""

    kind: ErrorKind = ErrorKind.NETWORK

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        error_type: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_type = error_type


class AuthenticationError(GatewayError):
    """Bad credentials, or no valid session."""

    kind = ErrorKind.AUTHENTICATION


class PermissionDeniedError(GatewayError):
    """The document's access-control list rejected the call."""

    kind = ErrorKind.PERMISSION


class NotFoundError(GatewayError):
    kind = ErrorKind.NOT_FOUND


class InvalidRequestError(GatewayError):
    """The backend rejected the payload (bad attribute, duplicate id)."""

    kind = ErrorKind.VALIDATION


class NetworkError(GatewayError):
    """Transport failure or backend outage."""

    kind = ErrorKind.NETWORK


def error_from_response(response: httpx.Response) -> GatewayError:
    """
    Build the matching GatewayError for a non-2xx response.

    The backend answers errors with ``{"message", "code", "type"}``. A 401
    whose type is ``user_unauthorized`` means the session is valid but the
    access-control list denies the action.
    """
    try:
        payload = response.json()
    except ValueError:
        payload = {}
    if not isinstance(payload, dict):
        payload = {}

    status = response.status_code
    message = payload.get("message") or response.reason_phrase or f"HTTP {status}"
    error_type = payload.get("type")

    if status in (400, 409):
        cls = InvalidRequestError
    elif status == 401:
        cls = PermissionDeniedError if error_type == "user_unauthorized" else AuthenticationError
    elif status == 403:
        cls = PermissionDeniedError
    elif status == 404:
        cls = NotFoundError
    elif status >= 500:
        cls = NetworkError
    else:
        cls = GatewayError

    return cls(message, status_code=status, error_type=error_type)
