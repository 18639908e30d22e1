"""
Tenant context dependency.

Every tenant-scoped handler depends on ``get_tenant_context``; no resource
query runs before the tenant has been resolved.
"""

import logging

from fastapi import Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from boom_booking.database import get_db
from boom_booking.exceptions import TenantContextRequiredError, TenantNotFoundError
from boom_booking.models.tenant import Tenant
from boom_booking.services.subdomain_service import ResolutionStatus, resolve_subdomain
from boom_booking.services.tenant_service import get_active_tenant

logger = logging.getLogger(__name__)


async def get_tenant_context(
    request: Request,
    tenant_id: int | None = Query(None, description="Explicit tenant id; overrides the subdomain"),
    db: AsyncSession = Depends(get_db),
) -> Tenant:
    """
    Resolve the tenant a request operates on.

    An explicit tenant_id wins and must reference an active tenant. Otherwise
    the subdomain candidate attached by SubdomainMiddleware is resolved.
    """
    if tenant_id is not None:
        tenant = await get_active_tenant(tenant_id, db)
        if tenant is None:
            raise TenantNotFoundError(tenant_id)
        return tenant

    resolution = await resolve_subdomain(getattr(request.state, "subdomain", None), db)
    if resolution.status is ResolutionStatus.found:
        return resolution.tenant
    if resolution.status is ResolutionStatus.invalid_subdomain:
        raise TenantNotFoundError(subdomain=resolution.subdomain)
    raise TenantContextRequiredError()
