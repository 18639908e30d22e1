"""
Request logging

One access line per request with its request ID, timing, client address and
the tenant subdomain it was addressed to. Every log record emitted while the
request runs carries the same request ID.
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

from boom_booking.config import Settings

request_id_var: ContextVar[str] = ContextVar("request_id", default="")

ACCESS_LOGGER = "boom_booking.access"
PLAIN_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"


class RequestIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get("")
        return True


class StructuredFormatter(logging.Formatter):
    """JSON formatter, one object per line."""

    ACCESS_FIELDS = ("method", "path", "status_code", "duration_ms", "client_ip", "subdomain")

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", ""),
        }
        entry.update({key: getattr(record, key) for key in self.ACCESS_FIELDS if hasattr(record, key)})
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def client_address(request: Request) -> str:
    """First hop of X-Forwarded-For, then X-Real-IP, then the socket peer."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.headers.get("X-Real-IP") or (request.client.host if request.client else "unknown")


def level_for(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


class StructuredLoggingMiddleware(BaseHTTPMiddleware):
    """Assigns the request ID (an incoming X-Request-ID is kept and echoed) and logs the access line."""

    def __init__(self, app: ASGIApp, skip_paths: tuple[str, ...] = ()):
        super().__init__(app)
        self.logger = logging.getLogger(ACCESS_LOGGER)
        self.skip_paths = frozenset(skip_paths)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request_id_var.set(request_id)
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as exc:
            self._access(request, 500, started, error=exc)
            raise

        response.headers["X-Request-ID"] = request_id
        self._access(request, response.status_code, started)
        return response

    def _access(self, request: Request, status_code: int, started: float, error: Exception | None = None) -> None:
        if request.url.path in self.skip_paths:
            return

        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        extra = {
            "method": request.method,
            "path": request.url.path,
            "status_code": status_code,
            "duration_ms": duration_ms,
            "client_ip": client_address(request),
        }
        subdomain = getattr(request.state, "subdomain", None)
        if subdomain:
            extra["subdomain"] = subdomain

        message = f"{request.method} {request.url.path} {status_code} {duration_ms}ms"
        if error is not None:
            message += f" ({type(error).__name__}: {error})"
        self.logger.log(level_for(status_code), message, extra=extra)


def configure_logging(settings: Settings) -> None:
    """Install one stream handler on the root logger, plain or JSON."""
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))
    root_logger.handlers.clear()

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter() if settings.log_json else logging.Formatter(PLAIN_FORMAT))
    handler.addFilter(RequestIdFilter())
    root_logger.addHandler(handler)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if settings.sql_echo else logging.WARNING)
