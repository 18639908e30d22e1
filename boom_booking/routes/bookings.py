"""
Booking Routes

GET    /api/bookings        ?id= ?room_id= ?date=YYYY-MM-DD ?status=
POST   /api/bookings        create (409 on overlap, 403 over the plan's monthly limit)
PUT    /api/bookings?id=    partial update
DELETE /api/bookings?id=    hard delete
"""

from datetime import date

from fastapi import APIRouter, Depends, Query
from fastapi import status as http_status
from sqlalchemy.ext.asyncio import AsyncSession

from boom_booking.database import get_db
from boom_booking.dependencies import get_tenant_context
from boom_booking.models.booking import BookingStatus
from boom_booking.models.tenant import Tenant
from boom_booking.responses import success_response
from boom_booking.schemas.booking import BookingCreate, BookingResponse, BookingUpdate
from boom_booking.services.booking_service import create_booking, delete_booking, list_bookings, update_booking

router = APIRouter(tags=["Bookings"])


@router.get("")
async def list_bookings_route(
    id: int | None = Query(None),
    room_id: int | None = Query(None),
    date: date | None = Query(None, description="YYYY-MM-DD"),
    status: BookingStatus | None = Query(None),
    tenant: Tenant = Depends(get_tenant_context),
    db: AsyncSession = Depends(get_db),
):
    bookings = await list_bookings(
        tenant.id,
        db,
        booking_id=id,
        room_id=room_id,
        on_date=date,
        status=status.value if status else None,
    )
    return success_response(data=[BookingResponse.model_validate(b).model_dump() for b in bookings])


@router.post("", status_code=http_status.HTTP_201_CREATED)
async def create_booking_route(
    payload: BookingCreate,
    tenant: Tenant = Depends(get_tenant_context),
    db: AsyncSession = Depends(get_db),
):
    booking = await create_booking(tenant.id, payload.model_dump(), db)
    return success_response(
        data=BookingResponse.model_validate(booking).model_dump(),
        message="Booking created successfully",
        status_code=http_status.HTTP_201_CREATED,
    )


@router.put("")
async def update_booking_route(
    payload: BookingUpdate,
    id: int = Query(...),
    tenant: Tenant = Depends(get_tenant_context),
    db: AsyncSession = Depends(get_db),
):
    updates = payload.model_dump(exclude_unset=True)
    if "status" in updates and updates["status"] is not None:
        updates["status"] = updates["status"].value
    booking = await update_booking(tenant.id, id, updates, db)
    return success_response(
        data=BookingResponse.model_validate(booking).model_dump(),
        message="Booking updated successfully",
    )


@router.delete("")
async def delete_booking_route(
    id: int = Query(...),
    tenant: Tenant = Depends(get_tenant_context),
    db: AsyncSession = Depends(get_db),
):
    await delete_booking(tenant.id, id, db)
    return success_response(data={"id": id}, message="Booking deleted successfully")
