"""CSRF protection middleware."""
import hashlib
import hmac
import logging
import secrets
import time
from typing import Optional

from fastapi import Request, Response, status
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from catalog_admin.settings import settings

CSRF_COOKIE_NAME = "csrf_token"
CSRF_FIELD_NAME = "csrf_token"
CSRF_HEADER_NAME = "X-CSRF-Token"


class CSRFProtectionMiddleware(BaseHTTPMiddleware):
    """
    Double-submit token check on state-changing requests.

    The token in the ``csrf_token`` cookie must equal the one posted in the
    form (or sent as ``X-CSRF-Token``), carry a valid signature and be
    younger than ``CSRF_TOKEN_EXPIRY``.
    """

    def __init__(self, app: ASGIApp):
        super().__init__(app)
        self.logger = logging.getLogger("catalog_admin.csrf")
        self.protected_methods = {"POST", "PUT", "DELETE", "PATCH"}
        self.exempt_paths = {"/health", "/ready"}

    async def dispatch(self, request: Request, call_next):
        if request.method not in self.protected_methods:
            return await call_next(request)

        if request.url.path in self.exempt_paths:
            return await call_next(request)

        token_from_request = await self._get_token_from_request(request)
        token_from_cookie = request.cookies.get(CSRF_COOKIE_NAME)

        if not token_from_cookie or not token_from_request:
            return self._reject(request, "CSRF token missing")

        if not self.validate_token(token_from_cookie, token_from_request):
            return self._reject(request, "CSRF token invalid")

        return await call_next(request)

    def _reject(self, request: Request, reason: str) -> Response:
        self.logger.warning(
            f"{reason} for {request.url.path}",
            extra={
                "request_id": getattr(request.state, "request_id", None),
                "extra_fields": {"path": request.url.path, "method": request.method},
            },
        )
        return Response(content=reason, status_code=status.HTTP_403_FORBIDDEN)

    async def _get_token_from_request(self, request: Request) -> Optional[str]:
        """Extract the token from the header or the form body."""
        token = request.headers.get(CSRF_HEADER_NAME)
        if token:
            return token

        content_type = request.headers.get("content-type", "")
        if not content_type.startswith(("application/x-www-form-urlencoded", "multipart/form-data")):
            return None

        # body() caches the payload so the route can parse the form again
        await request.body()
        form = await request.form()
        token = form.get(CSRF_FIELD_NAME)
        return token if isinstance(token, str) else None

    @staticmethod
    def _sign(payload: str) -> str:
        return hmac.new(
            settings.CSRF_SECRET_KEY.encode(), payload.encode(), hashlib.sha256
        ).hexdigest()

    @classmethod
    def validate_token(cls, cookie_token: str, request_token: str) -> bool:
        """Tokens must match, be correctly signed and not be expired."""
        if not hmac.compare_digest(cookie_token, request_token):
            return False

        try:
            timestamp, nonce, signature = request_token.split(".")
            issued_at = int(timestamp)
        except ValueError:
            return False

        if not hmac.compare_digest(signature, cls._sign(f"{timestamp}.{nonce}")):
            return False

        return time.time() - issued_at <= settings.CSRF_TOKEN_EXPIRY

    @classmethod
    def generate_token(cls) -> str:
        """Generate a new signed CSRF token."""
        payload = f"{int(time.time())}.{secrets.token_urlsafe(16)}"
        return f"{payload}.{cls._sign(payload)}"

    @staticmethod
    def set_csrf_cookie(response: Response, token: str) -> None:
        """Set CSRF token cookie on response."""
        response.set_cookie(
            key=CSRF_COOKIE_NAME,
            value=token,
            httponly=False,
            secure=settings.COOKIE_SECURE,
            samesite=settings.COOKIE_SAMESITE,
            max_age=settings.CSRF_TOKEN_EXPIRY
        )
