from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, ForeignKey, Integer, Time, UniqueConstraint
from sqlalchemy.orm import relationship

from boom_booking.database import Base
from boom_booking.models.tenant import utcnow

# day_of_week follows 0 = Sunday ... 6 = Saturday
DAY_NAMES = ("sunday", "monday", "tuesday", "wednesday", "thursday", "friday", "saturday")


class BusinessHour(Base):
    __tablename__ = "business_hours"

    id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(Integer, ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True)
    day_of_week = Column(Integer, nullable=False)
    open_time = Column(Time, nullable=True)
    close_time = Column(Time, nullable=True)
    is_closed = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    tenant = relationship("Tenant", back_populates="business_hours")

    __table_args__ = (
        UniqueConstraint("tenant_id", "day_of_week", name="uq_business_hours_tenant_day"),
        CheckConstraint("day_of_week >= 0 AND day_of_week <= 6", name="ck_business_hours_day_range"),
    )

    @property
    def day(self) -> str:
        return DAY_NAMES[self.day_of_week]
