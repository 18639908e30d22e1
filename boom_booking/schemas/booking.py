from datetime import datetime, timezone
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_serializer, field_validator, model_validator

from boom_booking.models.booking import BookingStatus


def to_naive_utc(value: datetime) -> datetime:
    """Bookings are stored as naive UTC; aware inputs are converted first."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class BookingCreate(BaseModel):
    room_id: int
    customer_name: str = Field(..., min_length=1, max_length=255)
    customer_email: EmailStr | None = None
    customer_phone: str | None = Field(None, max_length=50)
    start_time: datetime
    end_time: datetime
    notes: str | None = None

    @field_validator("start_time", "end_time")
    @classmethod
    def normalise_time(cls, v: datetime) -> datetime:
        return to_naive_utc(v)

    @model_validator(mode="after")
    def check_range(self) -> "BookingCreate":
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self


class BookingUpdate(BaseModel):
    room_id: int | None = None
    customer_name: str | None = Field(None, min_length=1, max_length=255)
    customer_email: EmailStr | None = None
    customer_phone: str | None = Field(None, max_length=50)
    start_time: datetime | None = None
    end_time: datetime | None = None
    status: BookingStatus | None = None
    notes: str | None = None

    @field_validator("start_time", "end_time")
    @classmethod
    def normalise_time(cls, v: datetime | None) -> datetime | None:
        return to_naive_utc(v) if v is not None else None



class BookingRoom(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    capacity: int
    category: str


class BookingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    tenant_id: int
    room_id: int
    customer_name: str
    customer_email: str | None
    customer_phone: str | None
    start_time: datetime
    end_time: datetime
    status: str
    notes: str | None
    total_price: Decimal
    created_at: datetime
    updated_at: datetime
    room: BookingRoom | None = None

    @field_serializer("total_price")
    def serialize_price(self, value: Decimal) -> float:
        return float(value)
