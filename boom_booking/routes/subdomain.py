"""
Subdomain Routes

GET  /api/subdomain   what the current request's subdomain resolves to
POST /api/subdomain   availability of a subdomain for signup
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from boom_booking.database import get_db
from boom_booking.responses import success_response
from boom_booking.schemas.subdomain import SubdomainCheckRequest
from boom_booking.schemas.tenant import TenantSummary
from boom_booking.services.subdomain_service import (
    RESERVED_SUBDOMAINS,
    check_subdomain_availability,
    resolve_subdomain,
)

router = APIRouter(tags=["Subdomain"])


@router.get("")
async def get_subdomain_info(request: Request, db: AsyncSession = Depends(get_db)):
    resolution = await resolve_subdomain(getattr(request.state, "subdomain", None), db)
    tenant = TenantSummary.model_validate(resolution.tenant).model_dump() if resolution.tenant else None
    return success_response(
        data={
            "subdomain": resolution.subdomain,
            "tenant": tenant,
            "is_main_domain": resolution.is_main_domain,
            "is_valid": resolution.is_valid,
        }
    )


@router.post("")
async def check_subdomain(payload: SubdomainCheckRequest, db: AsyncSession = Depends(get_db)):
    availability = await check_subdomain_availability(payload.subdomain, db)
    return success_response(
        data={
            "subdomain": availability.subdomain,
            "available": availability.available,
            "reason": availability.reason,
            "reserved_subdomains": list(RESERVED_SUBDOMAINS),
        }
    )
