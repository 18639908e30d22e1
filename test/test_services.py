"""
Service layer tests against a real SQLite session.

Async tests run under pytest-asyncio; each gets a fresh database file.
"""

import asyncio
from datetime import datetime, time
from decimal import Decimal

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from boom_booking.exceptions import (
    BookingConflictError,
    DuplicateResourceError,
    PlanLimitExceededError,
    TenantNotFoundError,
    ValidationError,
)
from boom_booking.models.tenant import Tenant
from boom_booking.services import booking_service, business_hours_service, room_service, tenant_service
from boom_booking.services.subdomain_service import ResolutionStatus, resolve_subdomain
from boom_booking.services.usage_service import get_usage_stats, period_start


def _room(name="Room A", price="25.00"):
    return {"name": name, "capacity": 4, "category": "Standard", "description": None, "price_per_hour": Decimal(price)}


def _slot(start_hour, end_hour, room_id):
    return {
        "room_id": room_id,
        "customer_name": "Alex",
        "customer_email": None,
        "customer_phone": None,
        "start_time": datetime(2030, 3, 1, start_hour),
        "end_time": datetime(2030, 3, 1, end_hour),
        "notes": None,
    }


class TestTenantService:
    async def test_create_seeds_hours_and_trial(self, session):
        tenant = await tenant_service.create_tenant("Neon Nights", "Neon-Nights", session, plan_type="pro")
        assert tenant.subdomain == "neon-nights"
        assert tenant.trial_ends_at is not None

        hours = await business_hours_service.list_business_hours(tenant.id, session)
        assert [h.day_of_week for h in hours] == list(range(7))

    async def test_duplicate_subdomain(self, session):
        await tenant_service.create_tenant("A", "same-name", session)
        with pytest.raises(DuplicateResourceError):
            await tenant_service.create_tenant("B", "same-name", session)

    async def test_invalid_subdomain(self, session):
        with pytest.raises(ValidationError):
            await tenant_service.create_tenant("A", "no", session)

    async def test_reactivation_rechecks_subdomain(self, session):
        first = await tenant_service.create_tenant("A", "shared-name", session)
        await tenant_service.update_tenant(first.id, {"status": "suspended"}, session)
        await tenant_service.create_tenant("B", "shared-name", session)
        with pytest.raises(DuplicateResourceError):
            await tenant_service.update_tenant(first.id, {"status": "active"}, session)

    async def test_soft_delete_hides_from_resolver(self, session):
        tenant = await tenant_service.create_tenant("A", "fading-star", session)
        assert (await resolve_subdomain("fading-star", session)).status is ResolutionStatus.found

        deleted = await tenant_service.delete_tenant(tenant.id, session)
        assert deleted.status == "deleted"
        assert (await resolve_subdomain("fading-star", session)).status is ResolutionStatus.invalid_subdomain
        assert await tenant_service.get_tenant_by_id(tenant.id, session, include_deleted=True) is not None

    async def test_lock_requires_active_tenant(self, session):
        tenant = await tenant_service.create_tenant("A", "locked-out", session)
        await tenant_service.update_tenant(tenant.id, {"status": "suspended"}, session)
        with pytest.raises(TenantNotFoundError):
            await tenant_service.lock_tenant(tenant.id, session)

    async def test_concurrent_signups_claim_subdomain_once(self, database):
        async def signup(name):
            async with database.sessionmaker() as db:
                return await tenant_service.create_tenant(name, "racey", db)

        results = await asyncio.gather(signup("A"), signup("B"), return_exceptions=True)
        created = [r for r in results if isinstance(r, Tenant)]
        assert len(created) == 1
        assert sum(isinstance(r, DuplicateResourceError) for r in results) == 1

        async with database.sessionmaker() as db:
            active = await db.execute(
                select(Tenant.id).where(func.lower(Tenant.subdomain) == "racey", Tenant.status == "active")
            )
        assert active.scalars().all() == [created[0].id]

    async def test_active_subdomain_is_unique_in_the_table(self, session):
        await tenant_service.create_tenant("A", "one-owner", session)
        session.add(Tenant(name="B", subdomain="ONE-OWNER"))
        with pytest.raises(IntegrityError):
            await session.commit()
        await session.rollback()

        session.add(Tenant(name="C", subdomain="one-owner", status="deleted"))
        await session.commit()


class TestRoomService:
    async def test_room_limit(self, session):
        tenant = await tenant_service.create_tenant("A", "tiny-club", session)
        await room_service.create_room(tenant.id, _room("One"), session)
        with pytest.raises(PlanLimitExceededError):
            await room_service.create_room(tenant.id, _room("Two"), session)

    async def test_reactivation_counts_against_limit(self, session):
        tenant = await tenant_service.create_tenant("A", "tiny-club", session)
        first = await room_service.create_room(tenant.id, _room("One"), session)
        await room_service.deactivate_room(tenant.id, first.id, session)
        await room_service.create_room(tenant.id, _room("Two"), session)
        with pytest.raises(PlanLimitExceededError):
            await room_service.update_room(tenant.id, first.id, {"is_active": True}, session)

    async def test_deleted_room_releases_its_name(self, session):
        tenant = await tenant_service.create_tenant("A", "name-game", session, plan_type="pro")
        first = await room_service.create_room(tenant.id, _room("Room A"), session)
        await room_service.deactivate_room(tenant.id, first.id, session)

        second = await room_service.create_room(tenant.id, _room("Room A"), session)
        assert second.id != first.id

        with pytest.raises(DuplicateResourceError):
            await room_service.update_room(tenant.id, first.id, {"is_active": True}, session)

    async def test_inactive_room_can_share_a_name(self, session):
        tenant = await tenant_service.create_tenant("A", "name-game", session, plan_type="pro")
        active = await room_service.create_room(tenant.id, _room("Room A"), session)
        old = await room_service.create_room(tenant.id, _room("Room B"), session)
        await room_service.deactivate_room(tenant.id, old.id, session)

        renamed = await room_service.update_room(tenant.id, old.id, {"name": active.name}, session)
        assert renamed.name == "Room A"
        assert renamed.is_active is False


class TestBookingService:
    def test_calculate_price(self):
        start = datetime(2030, 1, 1, 18, 0)
        assert booking_service.calculate_price(start, datetime(2030, 1, 1, 20, 0), Decimal("25.00")) == Decimal("50.00")
        assert booking_service.calculate_price(start, datetime(2030, 1, 1, 18, 20), Decimal("35.00")) == Decimal("11.67")

    async def test_conflict_and_cancel(self, session):
        tenant = await tenant_service.create_tenant("A", "busy-bar", session, plan_type="pro")
        room = await room_service.create_room(tenant.id, _room(), session)
        first = await booking_service.create_booking(tenant.id, _slot(18, 20, room.id), session)

        with pytest.raises(BookingConflictError):
            await booking_service.create_booking(tenant.id, _slot(19, 21, room.id), session)

        await booking_service.update_booking(tenant.id, first.id, {"status": "cancelled"}, session)
        second = await booking_service.create_booking(tenant.id, _slot(19, 21, room.id), session)
        assert second.total_price == Decimal("50.00")

    async def test_reinstating_cancelled_booking_checks_overlap(self, session):
        tenant = await tenant_service.create_tenant("A", "busy-bar", session, plan_type="pro")
        room = await room_service.create_room(tenant.id, _room(), session)
        first = await booking_service.create_booking(tenant.id, _slot(18, 20, room.id), session)
        await booking_service.update_booking(tenant.id, first.id, {"status": "cancelled"}, session)
        await booking_service.create_booking(tenant.id, _slot(18, 20, room.id), session)

        with pytest.raises(BookingConflictError):
            await booking_service.update_booking(tenant.id, first.id, {"status": "confirmed"}, session)

    async def test_usage_counts_bookings_this_month(self, session):
        tenant = await tenant_service.create_tenant("A", "count-me", session, plan_type="pro")
        room = await room_service.create_room(tenant.id, _room(), session)
        await booking_service.create_booking(tenant.id, _slot(10, 11, room.id), session)
        await booking_service.create_booking(tenant.id, _slot(11, 13, room.id), session)

        stats = await get_usage_stats(tenant, session)
        assert stats["current"]["booking_count"] == 2
        assert stats["current"]["total_revenue"] == 75.0


class TestBusinessHoursService:
    async def test_upsert_creates_missing_days(self, session):
        tenant = await tenant_service.create_tenant("A", "late-show", session)
        rows = await business_hours_service.list_business_hours(tenant.id, session)
        for row in rows:
            await session.delete(row)
        await session.commit()

        result = await business_hours_service.upsert_business_hours(
            tenant.id,
            [{"day_of_week": 5, "open_time": time(18, 0), "close_time": time(23, 59), "is_closed": False}],
            session,
        )
        assert [(r.day_of_week, r.open_time) for r in result] == [(5, time(18, 0))]


def test_period_start():
    now = datetime(2030, 5, 17, 14, 30)
    assert period_start("current_month", now) == datetime(2030, 5, 1)
    assert period_start("current_year", now) == datetime(2030, 1, 1)
    assert period_start("last_30_days", now) == datetime(2030, 4, 17, 14, 30)
    assert period_start("all", now) is None
