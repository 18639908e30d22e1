"""
Usage Routes

GET  /api/usage?period=   usage statistics against the tenant's plan
POST /api/usage           pre-flight limit check; 403 with the same data when exceeded
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from boom_booking.database import get_db
from boom_booking.dependencies import get_tenant_context
from boom_booking.models.tenant import Tenant
from boom_booking.responses import error_response, success_response
from boom_booking.schemas.usage import UsageCheckRequest, UsagePeriod
from boom_booking.services.usage_service import check_usage_limit, get_usage_stats

router = APIRouter(tags=["Usage"])
logger = logging.getLogger(__name__)


@router.get("")
async def get_usage_route(
    period: UsagePeriod = Query(UsagePeriod.current_month),
    tenant: Tenant = Depends(get_tenant_context),
    db: AsyncSession = Depends(get_db),
):
    stats = await get_usage_stats(tenant, db, period=period.value)
    return success_response(data=stats)


@router.post("")
async def check_usage_route(
    payload: UsageCheckRequest,
    tenant: Tenant = Depends(get_tenant_context),
    db: AsyncSession = Depends(get_db),
):
    check = await check_usage_limit(tenant, payload.resource_type.value, db, requested=payload.resource_count)
    if check.would_exceed_limit:
        logger.info(
            "Usage check denied: tenant_id=%d resource=%s current=%d limit=%d",
            tenant.id,
            check.resource_type,
            check.current_usage,
            check.limit,
        )
        return error_response(
            status_code=status.HTTP_403_FORBIDDEN,
            error=(
                f"{check.resource_type} limit exceeded. Current: {check.current_usage}, "
                f"Limit: {check.limit}, Requested: {check.requested_count}"
            ),
            data=check.as_dict(),
        )
    return success_response(data=check.as_dict())
