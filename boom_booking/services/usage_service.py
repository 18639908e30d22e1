"""
Usage and plan-limit accounting.

Read-only aggregation over the resource tables; nothing here writes.
"""

import logging
from datetime import datetime, timedelta

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from boom_booking.models.booking import Booking, BookingStatus
from boom_booking.models.room import Room
from boom_booking.models.tenant import Tenant, utcnow
from boom_booking.plans import PLAN_LIMITS, LimitCheck, ResourceType, check_limit, get_plan_limits, limit_reached

logger = logging.getLogger(__name__)


def period_start(period: str, now: datetime | None = None) -> datetime | None:
    """Lower bound on booking created_at for a reporting period; None means all time."""
    now = now or utcnow()
    if period == "current_month":
        return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    if period == "current_year":
        return now.replace(month=1, day=1, hour=0, minute=0, second=0, microsecond=0)
    if period == "last_30_days":
        return now - timedelta(days=30)
    return None


async def count_rooms(tenant_id: int, db: AsyncSession) -> int:
    result = await db.execute(
        select(func.count(Room.id)).where(Room.tenant_id == tenant_id, Room.is_active.is_(True))
    )
    return result.scalar_one()


async def count_bookings(tenant_id: int, db: AsyncSession, since: datetime | None = None) -> int:
    query = select(func.count(Booking.id)).where(Booking.tenant_id == tenant_id)
    if since is not None:
        query = query.where(Booking.created_at >= since)
    result = await db.execute(query)
    return result.scalar_one()


async def total_revenue(tenant_id: int, db: AsyncSession, since: datetime | None = None) -> float:
    query = select(func.coalesce(func.sum(Booking.total_price), 0)).where(
        Booking.tenant_id == tenant_id,
        Booking.status != BookingStatus.cancelled.value,
    )
    if since is not None:
        query = query.where(Booking.created_at >= since)
    result = await db.execute(query)
    return float(result.scalar_one() or 0)


async def current_usage(tenant: Tenant, resource_type: str, db: AsyncSession) -> int:
    """Usage counted against the plan: active rooms, and bookings made this month."""
    if resource_type == ResourceType.rooms.value:
        return await count_rooms(tenant.id, db)
    return await count_bookings(tenant.id, db, since=period_start("current_month"))


async def check_usage_limit(tenant: Tenant, resource_type: str, db: AsyncSession, requested: int = 1) -> LimitCheck:
    usage = await current_usage(tenant, resource_type, db)
    return check_limit(tenant.plan_type, resource_type, usage, requested)


async def monthly_trend(tenant_id: int, db: AsyncSession, months: int = 6) -> list[dict]:
    """Booking count and revenue per calendar month, oldest first."""
    since = period_start("current_month")
    for _ in range(months - 1):
        since = (since - timedelta(days=1)).replace(day=1)

    result = await db.execute(
        select(Booking.created_at, Booking.total_price).where(
            Booking.tenant_id == tenant_id,
            Booking.created_at >= since,
            Booking.status != BookingStatus.cancelled.value,
        )
    )
    buckets: dict[str, dict] = {}
    for created_at, price in result.all():
        month = created_at.strftime("%Y-%m")
        bucket = buckets.setdefault(month, {"month": month, "booking_count": 0, "revenue": 0.0})
        bucket["booking_count"] += 1
        bucket["revenue"] += float(price or 0)
    return [buckets[month] for month in sorted(buckets)]


async def get_usage_stats(tenant: Tenant, db: AsyncSession, period: str = "current_month") -> dict:
    since = period_start(period)
    limits = get_plan_limits(tenant.plan_type)
    room_count = await count_rooms(tenant.id, db)
    booking_count = await count_bookings(tenant.id, db, since=since)
    monthly_bookings = await count_bookings(tenant.id, db, since=period_start("current_month"))
    revenue = await total_revenue(tenant.id, db, since=since)

    room_limit_reached = limit_reached(limits["rooms"], room_count)
    booking_limit_reached = limit_reached(limits["bookings"], monthly_bookings)
    return {
        "tenant": {
            "id": tenant.id,
            "plan_type": tenant.plan_type,
            "trial_ends_at": tenant.trial_ends_at,
        },
        "period": period,
        "limits": limits,
        "current": {
            "room_count": room_count,
            "booking_count": booking_count,
            "total_revenue": revenue,
        },
        "trend": await monthly_trend(tenant.id, db),
        "status": {
            "room_limit_reached": room_limit_reached,
            "booking_limit_reached": booking_limit_reached,
            "needs_upgrade": room_limit_reached or booking_limit_reached,
        },
    }


async def get_billing_info(tenant: Tenant, db: AsyncSession) -> dict:
    """Plan and subscription state of a tenant. Payment-provider data is not tracked here."""
    room_count = await count_rooms(tenant.id, db)
    booking_count = await count_bookings(tenant.id, db)
    monthly_bookings = await count_bookings(tenant.id, db, since=period_start("current_month"))
    return {
        "tenant": {
            "id": tenant.id,
            "name": tenant.name,
            "plan_type": tenant.plan_type,
            "status": tenant.status,
            "subscription_status": tenant.subscription_status,
            "trial_ends_at": tenant.trial_ends_at,
            "created_at": tenant.created_at,
        },
        "usage": {
            "room_count": room_count,
            "booking_count": booking_count,
            "monthly_booking_count": monthly_bookings,
        },
        "limits": get_plan_limits(tenant.plan_type),
        "plans": [{"plan_type": plan, "limits": dict(limits)} for plan, limits in PLAN_LIMITS.items()],
    }
