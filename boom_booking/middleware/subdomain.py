"""
Subdomain Middleware

Attaches the tenant subdomain candidate of a request to request.state.

Candidate sources, first match wins:
  1. Host header, e.g. demo.localhost:3000 (browser clients)
  2. X-Tenant-Subdomain header (API clients on the main domain)
  3. ?subdomain= query parameter

Extraction is pure; the candidate is looked up against the tenants table
later by the tenant-context dependency.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from boom_booking.services.subdomain_service import extract_subdomain, normalize_subdomain

if TYPE_CHECKING:
    from collections.abc import Callable

    from fastapi import Request
    from starlette.responses import Response

logger = logging.getLogger(__name__)

SUBDOMAIN_HEADER = "X-Tenant-Subdomain"


def subdomain_candidate(request: Request, app_domain: str) -> tuple[str | None, str | None]:
    """Return (candidate, source) for a request, or (None, None) on the main domain."""
    candidate = extract_subdomain(request.headers.get("host"), app_domain)
    if candidate:
        return candidate, "host"

    header = normalize_subdomain(request.headers.get(SUBDOMAIN_HEADER))
    if header:
        return header, "header"

    query = normalize_subdomain(request.query_params.get("subdomain"))
    if query:
        return query, "query"
    return None, None


class SubdomainMiddleware(BaseHTTPMiddleware):
    """
    Attributes set on request.state:
        subdomain        (str | None)  candidate tenant subdomain
        subdomain_source (str | None)  "host", "header" or "query"
    """

    def __init__(self, app: ASGIApp, app_domain: str):
        super().__init__(app)
        self.app_domain = app_domain

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        candidate, source = subdomain_candidate(request, self.app_domain)
        request.state.subdomain = candidate
        request.state.subdomain_source = source
        if candidate:
            logger.debug("Subdomain candidate %s from %s", candidate, source)
        return await call_next(request)
