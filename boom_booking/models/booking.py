"""
Booking model.

Times are stored as naive UTC. A booking's room must belong to the same
tenant, and non-cancelled bookings of one room never overlap; both rules are
enforced by the booking service, not by the schema.
"""

import enum

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from boom_booking.database import Base
from boom_booking.models.tenant import utcnow


class BookingStatus(str, enum.Enum):
    confirmed = "confirmed"
    cancelled = "cancelled"
    completed = "completed"
    no_show = "no_show"


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(Integer, ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True)
    room_id = Column(Integer, ForeignKey("rooms.id", ondelete="CASCADE"), nullable=False)
    customer_name = Column(String(255), nullable=False)
    customer_email = Column(String(255), nullable=True)
    customer_phone = Column(String(50), nullable=True)
    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=False)
    status = Column(String(20), nullable=False, default=BookingStatus.confirmed.value)
    notes = Column(Text, nullable=True)
    total_price = Column(Numeric(10, 2), nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    tenant = relationship("Tenant", back_populates="bookings")
    room = relationship("Room", lazy="joined")

    __table_args__ = (
        CheckConstraint("end_time > start_time", name="ck_bookings_valid_time"),
        Index("idx_bookings_room_time", "tenant_id", "room_id", "start_time", "end_time"),
    )
