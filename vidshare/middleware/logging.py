"""
Structured Logging Middleware

Provides request/response access logging with request IDs and timing.
Outputs JSON when ``settings.log_json`` is on.
"""

import json
import logging
import time
import uuid
from collections.abc import Callable
from contextvars import ContextVar
from datetime import datetime, timezone

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from vidshare.config import settings

# Context variable for request ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def get_client_ip(request: Request) -> str:
    """
    Client address for logging and anonymous view keys.

    X-Forwarded-For (first hop) and X-Real-IP are only honoured when
    ``settings.trust_forwarded_for`` is on, i.e. behind a proxy that sets them.
    Otherwise the socket peer is used.
    """
    peer = request.client.host if request.client else "unknown"
    if not settings.trust_forwarded_for:
        return peer or "unknown"

    client_ip = request.headers.get("X-Forwarded-For", request.headers.get("X-Real-IP", peer))
    if client_ip and "," in client_ip:
        client_ip = client_ip.split(",")[0].strip()
    return client_ip or "unknown"


class RequestIdFilter(logging.Filter):
    """Logging filter to add request ID to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get("")
        return True


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", ""),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key in ["user_id", "method", "path", "status_code", "duration_ms", "client_ip", "error_code"]:
            if hasattr(record, key):
                log_data[key] = getattr(record, key)

        return json.dumps(log_data, default=str)


class StructuredLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for request/response logging.

    Features:
    - Unique request ID for tracing (echoed as X-Request-ID)
    - Request/response timing
    - Client IP tracking
    - User identification (when authenticated)
    """

    def __init__(self, app: ASGIApp, logger_name: str = "vidshare.access"):
        super().__init__(app)
        self.logger = logging.getLogger(logger_name)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        request_id_var.set(request_id)

        start_time = time.perf_counter()
        client_ip = get_client_ip(request)

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            self._log_request(request, 500, duration_ms, client_ip, request_id, error=str(e))
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        response.headers["X-Request-ID"] = request_id
        self._log_request(request, response.status_code, duration_ms, client_ip, request_id)
        return response

    def _log_request(
        self,
        request: Request,
        status_code: int,
        duration_ms: float,
        client_ip: str,
        request_id: str,
        error: str | None = None,
    ) -> None:
        """Log the request with structured data."""
        if request.url.path == "/health":
            return

        if status_code >= 500:
            log_level = logging.ERROR
        elif status_code >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        extra = {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "status_code": status_code,
            "duration_ms": round(duration_ms, 2),
            "client_ip": client_ip,
        }

        user_id = getattr(request.state, "user_id", None)
        if user_id:
            extra["user_id"] = user_id

        message = f"{request.method} {request.url.path} - {status_code} ({duration_ms:.2f}ms)"
        if error:
            message += f" - Error: {error}"

        self.logger.log(log_level, message, extra=extra)


def setup_structured_logging(log_level: str = "INFO", json_format: bool = False) -> None:
    """
    Configure logging for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        json_format: Use JSON formatter (True for production)
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    root_logger.handlers.clear()

    handler = logging.StreamHandler()
    if json_format:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"))
    handler.addFilter(RequestIdFilter())

    root_logger.addHandler(handler)
