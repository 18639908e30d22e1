from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from boom_booking.database import get_db
from boom_booking.dependencies import get_tenant_context
from boom_booking.models.tenant import Tenant
from boom_booking.responses import success_response
from boom_booking.schemas.business_hours import BusinessHourResponse, BusinessHoursUpdate
from boom_booking.services.business_hours_service import list_business_hours, upsert_business_hours

router = APIRouter(tags=["Business Hours"])


@router.get("")
async def list_business_hours_route(
    tenant: Tenant = Depends(get_tenant_context),
    db: AsyncSession = Depends(get_db),
):
    rows = await list_business_hours(tenant.id, db)
    return success_response(data=[BusinessHourResponse.model_validate(r).model_dump(mode="json") for r in rows])


@router.put("")
async def update_business_hours_route(
    payload: BusinessHoursUpdate,
    tenant: Tenant = Depends(get_tenant_context),
    db: AsyncSession = Depends(get_db),
):
    rows = await upsert_business_hours(tenant.id, [entry.model_dump() for entry in payload.hours], db)
    return success_response(
        data=[BusinessHourResponse.model_validate(r).model_dump(mode="json") for r in rows],
        message="Business hours updated successfully",
    )
