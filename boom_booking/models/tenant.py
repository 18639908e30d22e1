"""
Tenant model.

Each Tenant is one karaoke business account and the unit of data isolation.
Rooms, business hours and bookings carry a tenant_id FK. Deleting a tenant
is a status change, never a row removal.
"""

import enum
from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, Index, Integer, String, func, text
from sqlalchemy.orm import relationship

from boom_booking.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class TenantStatus(str, enum.Enum):
    active = "active"
    suspended = "suspended"
    deleted = "deleted"


class Tenant(Base):
    __tablename__ = "tenants"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    subdomain = Column(String(63), nullable=False, index=True)  # lowercase, URL-safe, e.g. "demo"
    domain = Column(String(253), nullable=True)
    plan_type = Column(String(50), nullable=False, default="free")
    status = Column(String(20), nullable=False, default=TenantStatus.active.value)
    settings = Column(JSON, nullable=False, default=dict)  # timezone, currency, ...
    subscription_status = Column(String(50), nullable=True)
    trial_ends_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    rooms = relationship("Room", back_populates="tenant", lazy="noload")
    business_hours = relationship("BusinessHour", back_populates="tenant", lazy="noload")
    bookings = relationship("Booking", back_populates="tenant", lazy="noload")

    # At most one active tenant per subdomain; deleted and suspended rows may share it
    __table_args__ = (
        Index("idx_tenant_status", "status"),
        Index(
            "uq_tenants_active_subdomain",
            func.lower(subdomain),
            unique=True,
            postgresql_where=text("status = 'active'"),
            sqlite_where=text("status = 'active'"),
        ),
    )

    @property
    def is_active(self) -> bool:
        return self.status == TenantStatus.active.value
