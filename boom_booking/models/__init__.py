from .booking import Booking, BookingStatus
from .business_hour import DAY_NAMES, BusinessHour
from .room import Room
from .tenant import Tenant, TenantStatus

__all__ = [
    "Booking",
    "BookingStatus",
    "BusinessHour",
    "DAY_NAMES",
    "Room",
    "Tenant",
    "TenantStatus",
]
