"""
Business Hours Service

One row per (tenant, day_of_week). Writes are upserts keyed on the day.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from boom_booking.models.business_hour import BusinessHour

logger = logging.getLogger(__name__)


async def list_business_hours(tenant_id: int, db: AsyncSession) -> list[BusinessHour]:
    result = await db.execute(
        select(BusinessHour).where(BusinessHour.tenant_id == tenant_id).order_by(BusinessHour.day_of_week)
    )
    return list(result.scalars().all())


async def upsert_business_hours(tenant_id: int, entries: list[dict], db: AsyncSession) -> list[BusinessHour]:
    """
    Create or replace the hours for each supplied day. Days not mentioned are
    left untouched. Closed days keep no open/close times.
    """
    existing = {row.day_of_week: row for row in await list_business_hours(tenant_id, db)}

    for entry in entries:
        is_closed = bool(entry.get("is_closed"))
        values = {
            "open_time": None if is_closed else entry.get("open_time"),
            "close_time": None if is_closed else entry.get("close_time"),
            "is_closed": is_closed,
        }
        row = existing.get(entry["day_of_week"])
        if row is None:
            row = BusinessHour(tenant_id=tenant_id, day_of_week=entry["day_of_week"], **values)
            db.add(row)
            existing[row.day_of_week] = row
        else:
            for field, value in values.items():
                setattr(row, field, value)

    await db.commit()
    logger.info("Business hours updated: tenant_id=%d days=%s", tenant_id, sorted(e["day_of_week"] for e in entries))
    return [existing[day] for day in sorted(existing)]
