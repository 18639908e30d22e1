"""
Tenant Service

Async CRUD operations for Tenant entities.
All functions accept an injected AsyncSession.
"""

import logging
from datetime import time, timedelta
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from boom_booking.exceptions import DuplicateResourceError, TenantNotFoundError, ValidationError
from boom_booking.models.booking import Booking
from boom_booking.models.business_hour import BusinessHour
from boom_booking.models.room import Room
from boom_booking.models.tenant import Tenant, TenantStatus, utcnow
from boom_booking.plans import PlanType
from boom_booking.services.subdomain_service import (
    MAIN_DOMAIN_LABELS,
    get_active_tenant_by_subdomain,
    normalize_subdomain,
    validate_subdomain,
)

logger = logging.getLogger(__name__)

# (day_of_week, open, close); 0 = Sunday
DEFAULT_BUSINESS_HOURS = (
    (0, time(10, 0), time(21, 0)),
    (1, time(9, 0), time(22, 0)),
    (2, time(9, 0), time(22, 0)),
    (3, time(9, 0), time(22, 0)),
    (4, time(9, 0), time(22, 0)),
    (5, time(9, 0), time(23, 0)),
    (6, time(10, 0), time(23, 0)),
)

UPDATABLE_FIELDS = {"name", "subdomain", "domain", "plan_type", "status", "settings"}
NULLABLE_FIELDS = {"domain"}


def _clean_subdomain(subdomain: str) -> str:
    candidate = normalize_subdomain(subdomain)
    if not validate_subdomain(candidate) or candidate in MAIN_DOMAIN_LABELS:
        raise ValidationError(
            "Subdomain must be 3-63 characters of a-z, 0-9 and single hyphens, and not a reserved name",
            field="subdomain",
        )
    return candidate


async def _ensure_subdomain_free(subdomain: str, db: AsyncSession, exclude_id: int | None = None) -> None:
    owner = await get_active_tenant_by_subdomain(subdomain, db)
    if owner is not None and owner.id != exclude_id:
        raise DuplicateResourceError("Tenant", "subdomain", subdomain)


async def create_tenant(
    name: str,
    subdomain: str,
    db: AsyncSession,
    plan_type: str = PlanType.free.value,
    domain: str | None = None,
    settings: dict[str, Any] | None = None,
    trial_days: int = 14,
) -> Tenant:
    """Create a tenant together with its default business hours."""
    subdomain = _clean_subdomain(subdomain)
    await _ensure_subdomain_free(subdomain, db)

    now = utcnow()
    tenant = Tenant(
        name=name,
        subdomain=subdomain,
        domain=domain,
        plan_type=plan_type,
        status=TenantStatus.active.value,
        settings=settings or {},
        trial_ends_at=None if plan_type == PlanType.free.value else now + timedelta(days=trial_days),
    )
    db.add(tenant)
    try:
        await db.flush()
    except IntegrityError:
        # Lost a race with a concurrent signup for the same subdomain
        await db.rollback()
        raise DuplicateResourceError("Tenant", "subdomain", subdomain)

    for day, open_time, close_time in DEFAULT_BUSINESS_HOURS:
        db.add(
            BusinessHour(
                tenant_id=tenant.id,
                day_of_week=day,
                open_time=open_time,
                close_time=close_time,
                is_closed=False,
            )
        )
    await db.commit()
    logger.info("Tenant created: id=%d subdomain=%s plan=%s", tenant.id, tenant.subdomain, tenant.plan_type)
    return tenant


async def get_tenant_by_id(tenant_id: int, db: AsyncSession, include_deleted: bool = False) -> Tenant | None:
    """Return a Tenant by primary key, or None if not found."""
    query = select(Tenant).where(Tenant.id == tenant_id)
    if not include_deleted:
        query = query.where(Tenant.status != TenantStatus.deleted.value)
    result = await db.execute(query)
    return result.scalars().first()


async def get_active_tenant(tenant_id: int, db: AsyncSession) -> Tenant | None:
    result = await db.execute(
        select(Tenant).where(Tenant.id == tenant_id, Tenant.status == TenantStatus.active.value)
    )
    return result.scalars().first()


async def list_tenants(
    db: AsyncSession,
    tenant_id: int | None = None,
    subdomain: str | None = None,
) -> list[Tenant]:
    """Return non-deleted tenants in id order, optionally filtered."""
    query = select(Tenant).where(Tenant.status != TenantStatus.deleted.value)
    if tenant_id is not None:
        query = query.where(Tenant.id == tenant_id)
    if subdomain:
        query = query.where(func.lower(Tenant.subdomain) == normalize_subdomain(subdomain))
    result = await db.execute(query.order_by(Tenant.id))
    return list(result.scalars().all())


async def get_tenant_stats(tenant_ids: list[int], db: AsyncSession) -> dict[int, dict[str, int]]:
    """Active room and booking counts per tenant."""
    stats = {tenant_id: {"room_count": 0, "booking_count": 0} for tenant_id in tenant_ids}
    if not tenant_ids:
        return stats

    rooms = await db.execute(
        select(Room.tenant_id, func.count(Room.id))
        .where(Room.tenant_id.in_(tenant_ids), Room.is_active.is_(True))
        .group_by(Room.tenant_id)
    )
    for tenant_id, count in rooms.all():
        stats[tenant_id]["room_count"] = count

    bookings = await db.execute(
        select(Booking.tenant_id, func.count(Booking.id))
        .where(Booking.tenant_id.in_(tenant_ids))
        .group_by(Booking.tenant_id)
    )
    for tenant_id, count in bookings.all():
        stats[tenant_id]["booking_count"] = count
    return stats


async def update_tenant(
    tenant_id: int,
    updates: dict,
    db: AsyncSession,
) -> Tenant:
    """
    Apply a partial update to a Tenant.

    Only keys present in `updates` are changed. Raises TenantNotFoundError
    for missing or deleted tenants.
    """
    changes = {
        k: v for k, v in updates.items() if k in UPDATABLE_FIELDS and (v is not None or k in NULLABLE_FIELDS)
    }
    if not changes:
        raise ValidationError("No valid fields to update")

    tenant = await get_tenant_by_id(tenant_id, db)
    if tenant is None:
        raise TenantNotFoundError(tenant_id)

    if "subdomain" in changes:
        changes["subdomain"] = _clean_subdomain(changes["subdomain"])

    becomes_active = changes.get("status", tenant.status) == TenantStatus.active.value
    subdomain = changes.get("subdomain", tenant.subdomain)
    if becomes_active and (subdomain != tenant.subdomain or not tenant.is_active):
        await _ensure_subdomain_free(subdomain, db, exclude_id=tenant.id)

    for field, value in changes.items():
        setattr(tenant, field, value)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise DuplicateResourceError("Tenant", "subdomain", subdomain)
    logger.info("Tenant updated: id=%d fields=%s", tenant.id, sorted(changes))
    return tenant


async def delete_tenant(tenant_id: int, db: AsyncSession) -> Tenant:
    """Soft-delete a tenant by setting status to 'deleted'. The row is kept."""
    tenant = await get_tenant_by_id(tenant_id, db)
    if tenant is None:
        raise TenantNotFoundError(tenant_id)
    tenant.status = TenantStatus.deleted.value
    await db.commit()
    logger.info("Tenant soft-deleted: id=%d subdomain=%s", tenant.id, tenant.subdomain)
    return tenant


async def lock_tenant(tenant_id: int, db: AsyncSession) -> Tenant:
    """
    Re-read the tenant row with FOR UPDATE so concurrent limit checks and
    inserts for the same tenant serialize. SQLite ignores the lock clause.
    """
    result = await db.execute(select(Tenant).where(Tenant.id == tenant_id).with_for_update())
    tenant = result.scalars().first()
    if tenant is None or not tenant.is_active:
        raise TenantNotFoundError(tenant_id)
    return tenant
