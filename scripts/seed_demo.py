#!/usr/bin/env python3
"""
Seed the demo tenant.

Creates the "Demo Karaoke" tenant (subdomain "demo", pro plan), its default
business hours and three rooms. Safe to run repeatedly: an existing active
demo tenant and existing rooms are left as they are.

    python scripts/seed_demo.py
"""

import asyncio
import logging
import os
import sys
from decimal import Decimal

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from boom_booking.config import get_settings
from boom_booking.database import Database
from boom_booking.middleware.logging import configure_logging
from boom_booking.services.room_service import create_room, list_rooms
from boom_booking.services.subdomain_service import get_active_tenant_by_subdomain
from boom_booking.services.tenant_service import create_tenant

logger = logging.getLogger("boom_booking.scripts.seed_demo")

DEMO_TENANT = {
    "name": "Demo Karaoke",
    "subdomain": "demo",
    "plan_type": "pro",
    "settings": {"timezone": "America/New_York", "currency": "USD"},
}

DEMO_ROOMS = [
    {
        "name": "Room A",
        "capacity": 4,
        "category": "Standard",
        "description": "Standard karaoke room for small groups",
        "price_per_hour": Decimal("25.00"),
    },
    {
        "name": "Room B",
        "capacity": 6,
        "category": "Premium",
        "description": "Premium room with better sound system",
        "price_per_hour": Decimal("35.00"),
    },
    {
        "name": "Room C",
        "capacity": 8,
        "category": "VIP",
        "description": "VIP room with luxury amenities",
        "price_per_hour": Decimal("50.00"),
    },
]


async def seed(database: Database, trial_days: int = 14) -> int:
    """Seed the demo tenant and return its id."""
    async with database.sessionmaker() as db:
        tenant = await get_active_tenant_by_subdomain(DEMO_TENANT["subdomain"], db)
        if tenant is None:
            tenant = await create_tenant(db=db, trial_days=trial_days, **DEMO_TENANT)
            logger.info("Created demo tenant id=%d", tenant.id)
        else:
            logger.info("Demo tenant already exists id=%d", tenant.id)

        existing = {room.name for room in await list_rooms(tenant.id, db, include_inactive=True)}
        for room in DEMO_ROOMS:
            if room["name"] in existing:
                continue
            await create_room(tenant.id, dict(room), db)
        return tenant.id


async def main() -> None:
    settings = get_settings()
    configure_logging(settings)
    database = Database.from_settings(settings)
    try:
        await database.create_all()
        tenant_id = await seed(database, trial_days=settings.trial_days)
        logger.info("Demo data ready for tenant_id=%d", tenant_id)
    finally:
        await database.dispose()


if __name__ == "__main__":
    asyncio.run(main())
