"""
Room Service

Rooms are always read and written through their owning tenant_id; a room
of another tenant is indistinguishable from a missing one.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from boom_booking.exceptions import DuplicateResourceError, PlanLimitExceededError, RoomNotFoundError, ValidationError
from boom_booking.models.room import Room
from boom_booking.plans import ResourceType
from boom_booking.services.tenant_service import lock_tenant
from boom_booking.services.usage_service import check_usage_limit

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = {"name", "capacity", "category", "description", "price_per_hour", "is_active"}
NULLABLE_FIELDS = {"description"}


async def list_rooms(
    tenant_id: int,
    db: AsyncSession,
    room_id: int | None = None,
    include_inactive: bool = False,
) -> list[Room]:
    query = select(Room).where(Room.tenant_id == tenant_id)
    if room_id is not None:
        query = query.where(Room.id == room_id)
    if not include_inactive:
        query = query.where(Room.is_active.is_(True))
    result = await db.execute(query.order_by(Room.id))
    return list(result.scalars().all())


async def get_room(tenant_id: int, room_id: int, db: AsyncSession, active_only: bool = False) -> Room | None:
    query = select(Room).where(Room.id == room_id, Room.tenant_id == tenant_id)
    if active_only:
        query = query.where(Room.is_active.is_(True))
    result = await db.execute(query)
    return result.scalars().first()


async def _ensure_name_free(tenant_id: int, name: str, db: AsyncSession, exclude_id: int | None = None) -> None:
    result = await db.execute(
        select(Room.id).where(Room.tenant_id == tenant_id, Room.name == name, Room.is_active.is_(True))
    )
    existing = result.scalars().first()
    if existing is not None and existing != exclude_id:
        raise DuplicateResourceError("Room", "name", name)


async def _commit_room(room: Room, db: AsyncSession) -> None:
    name = room.name
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise DuplicateResourceError("Room", "name", name)


async def create_room(tenant_id: int, data: dict, db: AsyncSession) -> Room:
    """Limit check and insert run in one transaction holding the tenant row lock."""
    tenant = await lock_tenant(tenant_id, db)
    limit = await check_usage_limit(tenant, ResourceType.rooms.value, db)
    if limit.would_exceed_limit:
        raise PlanLimitExceededError("rooms", limit.current_usage, limit.limit, plan_type=limit.plan_type)

    await _ensure_name_free(tenant_id, data["name"], db)
    room = Room(tenant_id=tenant_id, is_active=True, **data)
    db.add(room)
    await _commit_room(room, db)
    logger.info("Room created: id=%d tenant_id=%d name=%s", room.id, tenant_id, room.name)
    return room


async def update_room(tenant_id: int, room_id: int, updates: dict, db: AsyncSession) -> Room:
    changes = {
        k: v for k, v in updates.items() if k in UPDATABLE_FIELDS and (v is not None or k in NULLABLE_FIELDS)
    }
    if not changes:
        raise ValidationError("No valid fields to update")

    room = await get_room(tenant_id, room_id, db)
    if room is None:
        raise RoomNotFoundError(room_id)

    reactivating = bool(changes.get("is_active")) and not room.is_active
    if reactivating:
        tenant = await lock_tenant(tenant_id, db)
        limit = await check_usage_limit(tenant, ResourceType.rooms.value, db)
        if limit.would_exceed_limit:
            raise PlanLimitExceededError("rooms", limit.current_usage, limit.limit, plan_type=limit.plan_type)

    # Only active rooms hold their name
    name = changes.get("name", room.name)
    if changes.get("is_active", room.is_active) and (reactivating or name != room.name):
        await _ensure_name_free(tenant_id, name, db, exclude_id=room.id)

    for field, value in changes.items():
        setattr(room, field, value)
    await _commit_room(room, db)
    logger.info("Room updated: id=%d tenant_id=%d fields=%s", room.id, tenant_id, sorted(changes))
    return room


async def deactivate_room(tenant_id: int, room_id: int, db: AsyncSession) -> Room:
    """Soft delete: the room disappears from listings but keeps its bookings."""
    room = await get_room(tenant_id, room_id, db, active_only=True)
    if room is None:
        raise RoomNotFoundError(room_id)
    room.is_active = False
    await db.commit()
    logger.info("Room deactivated: id=%d tenant_id=%d", room.id, tenant_id)
    return room
