"""
Subdomain Resolver

Maps a request host to a tenant context:

    host="demo.localhost:3000", app_domain="localhost" -> candidate "demo"
    host="localhost" / "www.localhost"                -> main domain
    host="demo.boom-booking.vercel.app"                -> candidate "demo"

The candidate is then looked up case-insensitively against active tenants.
Extraction is pure; only ``resolve_subdomain`` and
``check_subdomain_availability`` touch the database (one read each).
"""

from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from boom_booking.models.tenant import Tenant, TenantStatus

logger = logging.getLogger(__name__)

# Leftmost labels that address the main site rather than a tenant
MAIN_DOMAIN_LABELS = frozenset({"www", "api", "admin", "app", "staging", "dev", "test"})

RESERVED_SUBDOMAINS = (
    "www", "api", "admin", "app", "staging", "dev", "test", "demo",
    "mail", "email", "ftp", "blog", "shop", "store", "support",
    "help", "docs", "status", "monitor", "metrics", "logs",
    "cdn", "assets", "static", "media", "images", "files",
    "secure", "ssl", "tls", "vpn", "proxy", "gateway",
    "auth", "login", "signup", "register", "account",
    "billing", "payment", "checkout", "order", "invoice",
    "dashboard", "panel", "console", "control", "manage",
)  # fmt: skip

_LABEL_RE = re.compile(r"^[a-z0-9-]+$")
_SUBDOMAIN_RE = re.compile(r"^[a-z0-9]([a-z0-9-]*[a-z0-9])?$")

MIN_SUBDOMAIN_LENGTH = 3
MAX_SUBDOMAIN_LENGTH = 63


class ResolutionStatus(str, enum.Enum):
    found = "found"
    main_domain = "main_domain"
    invalid_subdomain = "invalid_subdomain"


@dataclass(frozen=True)
class SubdomainResolution:
    status: ResolutionStatus
    subdomain: str | None = None
    tenant: Tenant | None = None

    @property
    def is_main_domain(self) -> bool:
        return self.status is ResolutionStatus.main_domain

    @property
    def is_valid(self) -> bool:
        return self.status is ResolutionStatus.found


@dataclass(frozen=True)
class Availability:
    subdomain: str
    available: bool
    reason: str


def normalize_subdomain(value: str | None) -> str:
    return (value or "").strip().lower()


def extract_subdomain(host: str | None, app_domain: str) -> str | None:
    """
    Extract the tenant subdomain candidate from a host header.

    Examples:
        host="acme.localhost:8000", app_domain="localhost" -> "acme"
        host="localhost",           app_domain="localhost" -> None
        host="www.localhost",       app_domain="localhost" -> None
        host="acme.example.com",    app_domain="localhost" -> "acme"
        host="example.com",         app_domain="localhost" -> None
    """
    hostname = normalize_subdomain(host).split(":")[0].rstrip(".")
    app_domain = normalize_subdomain(app_domain)
    if not hostname or hostname == app_domain:
        return None

    labels = hostname.split(".")
    if all(label.isdigit() for label in labels):
        return None

    if app_domain and hostname.endswith("." + app_domain):
        candidate = labels[0]
    elif len(labels) >= 3:
        candidate = labels[0]
    else:
        return None

    if not candidate or candidate in MAIN_DOMAIN_LABELS or not _LABEL_RE.match(candidate):
        return None
    return candidate


def validate_subdomain(subdomain: str) -> bool:
    """3-63 chars of [a-z0-9-], no leading/trailing or doubled hyphen."""
    return (
        MIN_SUBDOMAIN_LENGTH <= len(subdomain) <= MAX_SUBDOMAIN_LENGTH
        and bool(_SUBDOMAIN_RE.match(subdomain))
        and "--" not in subdomain
    )


def is_reserved(subdomain: str) -> bool:
    return subdomain in RESERVED_SUBDOMAINS


async def get_active_tenant_by_subdomain(subdomain: str, db: AsyncSession) -> Tenant | None:
    result = await db.execute(
        select(Tenant)
        .where(func.lower(Tenant.subdomain) == normalize_subdomain(subdomain))
        .where(Tenant.status == TenantStatus.active.value)
        .order_by(Tenant.id)
    )
    return result.scalars().first()


async def resolve_subdomain(subdomain: str | None, db: AsyncSession) -> SubdomainResolution:
    """Look up an extracted candidate. No candidate means the main domain."""
    candidate = normalize_subdomain(subdomain)
    if not candidate:
        return SubdomainResolution(status=ResolutionStatus.main_domain)

    tenant = await get_active_tenant_by_subdomain(candidate, db)
    if tenant is None:
        logger.info("No active tenant for subdomain=%s", candidate)
        return SubdomainResolution(status=ResolutionStatus.invalid_subdomain, subdomain=candidate)

    logger.debug("Resolved subdomain=%s to tenant_id=%d", candidate, tenant.id)
    return SubdomainResolution(status=ResolutionStatus.found, subdomain=candidate, tenant=tenant)


async def check_subdomain_availability(subdomain: str, db: AsyncSession) -> Availability:
    candidate = normalize_subdomain(subdomain)
    if not validate_subdomain(candidate):
        return Availability(candidate, False, "Invalid subdomain format")
    if is_reserved(candidate):
        return Availability(candidate, False, "Subdomain is reserved")
    if await get_active_tenant_by_subdomain(candidate, db) is not None:
        return Availability(candidate, False, "Subdomain already taken")
    return Availability(candidate, True, "Available")
