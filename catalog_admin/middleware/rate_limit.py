"""Rate limiting for credential endpoints."""
import logging
import time
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from fastapi import Request, Response, status
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from catalog_admin.settings import settings


@dataclass
class RateLimitBucket:
    """Timestamps of recent requests from one client."""
    requests: List[float] = field(default_factory=list)


class RateLimiter:
    """In-memory sliding window limiter."""

    def __init__(self):
        # {endpoint: {client_ip: RateLimitBucket}}
        self.buckets: Dict[str, Dict[str, RateLimitBucket]] = defaultdict(
            lambda: defaultdict(RateLimitBucket)
        )

    def is_allowed(
        self,
        client_ip: str,
        endpoint: str,
        max_requests: int,
        window_seconds: int
    ) -> Tuple[bool, int]:
        """
        Check if request is allowed under rate limit.

        Returns:
            Tuple of (is_allowed, retry_after_seconds)
        """
        now = time.time()
        bucket = self.buckets[endpoint][client_ip]
        bucket.requests = [ts for ts in bucket.requests if now - ts < window_seconds]

        if len(bucket.requests) < max_requests:
            bucket.requests.append(now)
            return True, 0

        retry_after = int(window_seconds - (now - min(bucket.requests))) + 1
        return False, retry_after

    def reset(self):
        """Reset all buckets (for testing)."""
        self.buckets.clear()


# Global rate limiter instance
rate_limiter = RateLimiter()


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Throttle password login attempts per client IP."""

    def __init__(self, app: ASGIApp):
        super().__init__(app)
        self.logger = logging.getLogger("catalog_admin.ratelimit")
        self.rate_limits = {
            "/auth/login": (
                settings.RATE_LIMIT_AUTH_REQUESTS,
                settings.RATE_LIMIT_AUTH_WINDOW
            ),
        }

    async def dispatch(self, request: Request, call_next):
        if not settings.RATE_LIMIT_ENABLED or request.method != "POST":
            return await call_next(request)

        path = request.url.path
        if path not in self.rate_limits:
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        max_requests, window_seconds = self.rate_limits[path]
        allowed, retry_after = rate_limiter.is_allowed(
            client_ip=client_ip,
            endpoint=path,
            max_requests=max_requests,
            window_seconds=window_seconds
        )

        if not allowed:
            self.logger.warning(
                f"Rate limit exceeded for {client_ip} on {path}",
                extra={
                    "request_id": getattr(request.state, "request_id", None),
                    "extra_fields": {
                        "client_ip": client_ip,
                        "endpoint": path,
                        "retry_after": retry_after
                    }
                }
            )
            return Response(
                content=f"Rate limit exceeded. Try again in {retry_after} seconds.",
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                headers={"Retry-After": str(retry_after)}
            )

        return await call_next(request)
