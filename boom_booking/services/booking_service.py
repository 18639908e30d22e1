"""
Booking Service

Bookings of one room never overlap unless one of them is cancelled. Creates
and time changes take the tenant row lock first, so the overlap check, the
monthly limit check and the write happen in one transaction.

Overlap uses half-open intervals: a booking ending at 20:00 does not clash
with one starting at 20:00.
"""

import logging
from datetime import date, datetime, time, timedelta
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from boom_booking.exceptions import (
    BookingConflictError,
    BookingNotFoundError,
    PlanLimitExceededError,
    RoomNotFoundError,
    ValidationError,
)
from boom_booking.models.booking import Booking, BookingStatus
from boom_booking.models.room import Room
from boom_booking.plans import ResourceType
from boom_booking.services.room_service import get_room
from boom_booking.services.tenant_service import lock_tenant
from boom_booking.services.usage_service import check_usage_limit

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = {
    "room_id",
    "customer_name",
    "customer_email",
    "customer_phone",
    "start_time",
    "end_time",
    "status",
    "notes",
}
NULLABLE_FIELDS = {"customer_email", "customer_phone", "notes"}
_CENTS = Decimal("0.01")


def calculate_price(start_time: datetime, end_time: datetime, price_per_hour) -> Decimal:
    """Hours booked times the hourly rate, rounded to cents."""
    seconds = Decimal(int((end_time - start_time).total_seconds()))
    hours = seconds / Decimal(3600)
    return (hours * Decimal(str(price_per_hour or 0))).quantize(_CENTS, rounding=ROUND_HALF_UP)


async def list_bookings(
    tenant_id: int,
    db: AsyncSession,
    booking_id: int | None = None,
    room_id: int | None = None,
    on_date: date | None = None,
    status: str | None = None,
) -> list[Booking]:
    query = select(Booking).where(Booking.tenant_id == tenant_id)
    if booking_id is not None:
        query = query.where(Booking.id == booking_id)
    if room_id is not None:
        query = query.where(Booking.room_id == room_id)
    if on_date is not None:
        day_start = datetime.combine(on_date, time.min)
        query = query.where(Booking.start_time >= day_start, Booking.start_time < day_start + timedelta(days=1))
    if status:
        query = query.where(Booking.status == status)
    result = await db.execute(query.order_by(Booking.start_time, Booking.id))
    return list(result.scalars().all())


async def get_booking(tenant_id: int, booking_id: int, db: AsyncSession) -> Booking | None:
    result = await db.execute(select(Booking).where(Booking.id == booking_id, Booking.tenant_id == tenant_id))
    return result.scalars().first()


async def find_conflict(
    tenant_id: int,
    room_id: int,
    start_time: datetime,
    end_time: datetime,
    db: AsyncSession,
    exclude_id: int | None = None,
) -> Booking | None:
    """Return the first non-cancelled booking of the room overlapping [start_time, end_time)."""
    query = select(Booking).where(
        Booking.tenant_id == tenant_id,
        Booking.room_id == room_id,
        Booking.status != BookingStatus.cancelled.value,
        Booking.start_time < end_time,
        Booking.end_time > start_time,
    )
    if exclude_id is not None:
        query = query.where(Booking.id != exclude_id)
    result = await db.execute(query.order_by(Booking.start_time).limit(1))
    return result.scalars().first()


async def _active_room(tenant_id: int, room_id: int, db: AsyncSession) -> Room:
    room = await get_room(tenant_id, room_id, db, active_only=True)
    if room is None:
        raise RoomNotFoundError(room_id)
    return room


async def create_booking(tenant_id: int, data: dict, db: AsyncSession) -> Booking:
    start_time, end_time = data["start_time"], data["end_time"]
    if end_time <= start_time:
        raise ValidationError("end_time must be after start_time", field="end_time")

    tenant = await lock_tenant(tenant_id, db)
    room = await _active_room(tenant_id, data["room_id"], db)

    conflict = await find_conflict(tenant_id, room.id, start_time, end_time, db)
    if conflict is not None:
        raise BookingConflictError(room.id, conflict.id)

    limit = await check_usage_limit(tenant, ResourceType.bookings.value, db)
    if limit.would_exceed_limit:
        raise PlanLimitExceededError("bookings", limit.current_usage, limit.limit, plan_type=limit.plan_type)

    booking = Booking(
        tenant_id=tenant_id,
        status=BookingStatus.confirmed.value,
        total_price=calculate_price(start_time, end_time, room.price_per_hour),
        **data,
    )
    booking.room = room
    db.add(booking)
    await db.commit()
    logger.info(
        "Booking created: id=%d tenant_id=%d room_id=%d start=%s end=%s",
        booking.id,
        tenant_id,
        room.id,
        start_time.isoformat(),
        end_time.isoformat(),
    )
    return booking


async def update_booking(tenant_id: int, booking_id: int, updates: dict, db: AsyncSession) -> Booking:
    """
    Apply a partial update. The merged time range must stay valid and, unless
    the booking ends up cancelled, must not overlap another booking of its room.
    """
    changes = {
        k: v for k, v in updates.items() if k in UPDATABLE_FIELDS and (v is not None or k in NULLABLE_FIELDS)
    }
    if not changes:
        raise ValidationError("No valid fields to update")

    await lock_tenant(tenant_id, db)
    booking = await get_booking(tenant_id, booking_id, db)
    if booking is None:
        raise BookingNotFoundError(booking_id)

    room = booking.room
    if "room_id" in changes and changes["room_id"] != booking.room_id:
        room = await _active_room(tenant_id, changes["room_id"], db)

    start_time = changes.get("start_time", booking.start_time)
    end_time = changes.get("end_time", booking.end_time)
    if end_time <= start_time:
        raise ValidationError("end_time must be after start_time", field="end_time")

    status = changes.get("status", booking.status)
    if status != BookingStatus.cancelled.value:
        conflict = await find_conflict(tenant_id, room.id, start_time, end_time, db, exclude_id=booking.id)
        if conflict is not None:
            raise BookingConflictError(room.id, conflict.id)

    for field, value in changes.items():
        setattr(booking, field, value)
    booking.room = room
    booking.total_price = calculate_price(start_time, end_time, room.price_per_hour)
    await db.commit()
    logger.info("Booking updated: id=%d tenant_id=%d fields=%s", booking.id, tenant_id, sorted(changes))
    return booking


async def delete_booking(tenant_id: int, booking_id: int, db: AsyncSession) -> Booking:
    booking = await get_booking(tenant_id, booking_id, db)
    if booking is None:
        raise BookingNotFoundError(booking_id)
    await db.delete(booking)
    await db.commit()
    logger.info("Booking deleted: id=%d tenant_id=%d", booking_id, tenant_id)
    return booking
