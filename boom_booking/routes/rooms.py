"""
Room Routes

All operations are scoped to the tenant resolved by get_tenant_context.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from boom_booking.database import get_db
from boom_booking.dependencies import get_tenant_context
from boom_booking.models.tenant import Tenant
from boom_booking.responses import success_response
from boom_booking.schemas.room import RoomCreate, RoomResponse, RoomUpdate
from boom_booking.services.room_service import create_room, deactivate_room, list_rooms, update_room

router = APIRouter(tags=["Rooms"])


@router.get("")
async def list_rooms_route(
    id: int | None = Query(None),
    include_inactive: bool = Query(False),
    tenant: Tenant = Depends(get_tenant_context),
    db: AsyncSession = Depends(get_db),
):
    rooms = await list_rooms(tenant.id, db, room_id=id, include_inactive=include_inactive)
    return success_response(data=[RoomResponse.model_validate(r).model_dump() for r in rooms])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_room_route(
    payload: RoomCreate,
    tenant: Tenant = Depends(get_tenant_context),
    db: AsyncSession = Depends(get_db),
):
    room = await create_room(tenant.id, payload.model_dump(), db)
    return success_response(
        data=RoomResponse.model_validate(room).model_dump(),
        message="Room created successfully",
        status_code=status.HTTP_201_CREATED,
    )


@router.put("")
async def update_room_route(
    payload: RoomUpdate,
    id: int = Query(...),
    tenant: Tenant = Depends(get_tenant_context),
    db: AsyncSession = Depends(get_db),
):
    room = await update_room(tenant.id, id, payload.model_dump(exclude_unset=True), db)
    return success_response(data=RoomResponse.model_validate(room).model_dump(), message="Room updated successfully")


@router.delete("")
async def delete_room_route(
    id: int = Query(...),
    tenant: Tenant = Depends(get_tenant_context),
    db: AsyncSession = Depends(get_db),
):
    room = await deactivate_room(tenant.id, id, db)
    return success_response(data={"id": room.id}, message="Room deleted successfully")
