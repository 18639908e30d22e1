"""
Tenant Routes

GET    /api/tenants            list tenants (?id=, ?subdomain=)
POST   /api/tenants            create tenant
PUT    /api/tenants?id=        partial update
DELETE /api/tenants?id=        soft delete (status=deleted)

Tenant administration is not tenant-scoped, so these routes do not use the
tenant context dependency.
"""

import logging

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from boom_booking.database import get_db
from boom_booking.responses import success_response
from boom_booking.schemas.tenant import TenantCreate, TenantResponse, TenantStats, TenantUpdate
from boom_booking.services.tenant_service import (
    create_tenant,
    delete_tenant,
    get_tenant_stats,
    list_tenants,
    update_tenant,
)

router = APIRouter(tags=["Tenants"])
logger = logging.getLogger(__name__)


@router.get("")
async def list_tenants_route(
    id: int | None = Query(None),
    subdomain: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
):
    """List non-deleted tenants with their room and booking counts."""
    tenants = await list_tenants(db, tenant_id=id, subdomain=subdomain)
    stats = await get_tenant_stats([t.id for t in tenants], db)
    data = [
        TenantResponse.model_validate(t).model_copy(update={"stats": TenantStats(**stats[t.id])}).model_dump()
        for t in tenants
    ]
    return success_response(data=data)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_tenant_route(
    payload: TenantCreate,
    request: Request,
    db: AsyncSession = Depends(get_db),
):
    tenant = await create_tenant(
        name=payload.name,
        subdomain=payload.subdomain,
        db=db,
        plan_type=payload.plan_type.value,
        domain=payload.domain,
        settings=payload.settings,
        trial_days=request.app.state.settings.trial_days,
    )
    return success_response(
        data=TenantResponse.model_validate(tenant).model_dump(),
        message="Tenant created successfully",
        status_code=status.HTTP_201_CREATED,
    )


@router.put("")
async def update_tenant_route(
    payload: TenantUpdate,
    id: int = Query(...),
    db: AsyncSession = Depends(get_db),
):
    updates = payload.model_dump(mode="json", exclude_unset=True)
    tenant = await update_tenant(id, updates, db)
    return success_response(
        data=TenantResponse.model_validate(tenant).model_dump(),
        message="Tenant updated successfully",
    )


@router.delete("")
async def delete_tenant_route(
    id: int = Query(...),
    db: AsyncSession = Depends(get_db),
):
    tenant = await delete_tenant(id, db)
    return success_response(data={"id": tenant.id}, message="Tenant deleted successfully")
