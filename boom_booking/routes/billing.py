from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from boom_booking.database import get_db
from boom_booking.dependencies import get_tenant_context
from boom_booking.models.tenant import Tenant
from boom_booking.responses import success_response
from boom_booking.services.usage_service import get_billing_info

router = APIRouter(tags=["Billing"])


@router.get("")
async def get_billing_route(
    tenant: Tenant = Depends(get_tenant_context),
    db: AsyncSession = Depends(get_db),
):
    """Plan, subscription status, usage and the plan catalog. Read-only."""
    return success_response(data=await get_billing_info(tenant, db))
