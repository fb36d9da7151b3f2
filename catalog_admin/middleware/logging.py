"""Structured request logging with request ids."""
import json
import logging
import time
import uuid
from datetime import datetime, timezone
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from catalog_admin.settings import settings

# Probes are logged at DEBUG to keep orchestrator noise out of the logs
QUIET_PATHS = {"/health", "/ready"}


class JSONFormatter(logging.Formatter):
    """One JSON object per log line."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if hasattr(record, "request_id"):
            log_data["request_id"] = record.request_id

        if hasattr(record, "extra_fields"):
            log_data.update(record.extra_fields)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every request with a generated request id and its duration."""

    def __init__(self, app: ASGIApp):
        super().__init__(app)
        self.logger = logging.getLogger("catalog_admin.requests")

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        level = logging.DEBUG if request.url.path in QUIET_PATHS else logging.INFO

        start_time = time.perf_counter()
        extra = {
            "request_id": request_id,
            "extra_fields": {
                "method": request.method,
                "path": request.url.path,
                "client_ip": request.client.host if request.client else None,
            },
        }
        self.logger.log(level, f"Request started: {request.method} {request.url.path}", extra=extra)

        try:
            response = await call_next(request)
        except Exception as e:
            extra["extra_fields"]["duration_ms"] = round((time.perf_counter() - start_time) * 1000, 2)
            extra["extra_fields"]["error"] = str(e)
            self.logger.error(
                f"Request failed: {request.method} {request.url.path} - {e}",
                extra=extra,
                exc_info=True,
            )
            raise

        extra["extra_fields"]["status_code"] = response.status_code
        extra["extra_fields"]["duration_ms"] = round((time.perf_counter() - start_time) * 1000, 2)
        self.logger.log(
            level,
            f"Request completed: {request.method} {request.url.path} - {response.status_code}",
            extra=extra,
        )

        response.headers["X-Request-ID"] = request_id
        return response


def setup_logging() -> None:
    """Configure the root logger from settings."""
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper()))
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    if settings.LOG_FORMAT == "json":
        console_handler.setFormatter(JSONFormatter())
    else:
        console_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
    root_logger.addHandler(console_handler)

    if settings.LOG_FILE:
        file_handler = logging.FileHandler(settings.LOG_FILE)
        file_handler.setFormatter(JSONFormatter())
        root_logger.addHandler(file_handler)

    # httpx logs every request at INFO; the gateway logs its own failures
    logging.getLogger("httpx").setLevel(logging.WARNING)

    logging.info(f"Logging configured: level={settings.LOG_LEVEL}, format={settings.LOG_FORMAT}")
