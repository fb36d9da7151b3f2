"""Request middleware: logging, rate limiting and CSRF protection."""
from .logging import RequestLoggingMiddleware, setup_logging
from .rate_limit import RateLimitMiddleware
from .csrf import CSRFProtectionMiddleware

__all__ = [
    "RequestLoggingMiddleware",
    "setup_logging",
    "RateLimitMiddleware",
    "CSRFProtectionMiddleware",
]
