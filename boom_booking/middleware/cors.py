"""
CORS Middleware

Every response carries the same permissive CORS headers, and every OPTIONS
request is answered with 200 and an empty body before routing. Unexpected
errors raised below this middleware are answered here with the 500 envelope.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from boom_booking.exception_handlers import unhandled_exception_handler

if TYPE_CHECKING:
    from collections.abc import Callable

    from fastapi import Request

ALLOWED_METHODS = "GET,OPTIONS,PATCH,DELETE,POST,PUT"
ALLOWED_HEADERS = "Content-Type, Authorization, X-Requested-With, X-Tenant-Subdomain"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": ALLOWED_METHODS,
    "Access-Control-Allow-Headers": ALLOWED_HEADERS,
}


class CORSMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=CORS_HEADERS)

        try:
            response = await call_next(request)
        except Exception as exc:
            response = await unhandled_exception_handler(request, exc)
        response.headers.update(CORS_HEADERS)
        return response
