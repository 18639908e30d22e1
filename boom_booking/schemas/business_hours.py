from datetime import time

from pydantic import BaseModel, ConfigDict, Field, field_serializer, model_validator


class BusinessHourEntry(BaseModel):
    day_of_week: int = Field(..., ge=0, le=6, description="0 = Sunday ... 6 = Saturday")
    open_time: time | None = None
    close_time: time | None = None
    is_closed: bool = False

    @model_validator(mode="after")
    def check_range(self) -> "BusinessHourEntry":
        if self.is_closed:
            return self
        if self.open_time is None or self.close_time is None:
            raise ValueError("open_time and close_time are required unless the day is closed")
        if self.close_time <= self.open_time:
            raise ValueError("close_time must be after open_time")
        return self


class BusinessHoursUpdate(BaseModel):
    hours: list[BusinessHourEntry] = Field(..., min_length=1, max_length=7)

    @model_validator(mode="after")
    def unique_days(self) -> "BusinessHoursUpdate":
        days = [entry.day_of_week for entry in self.hours]
        if len(days) != len(set(days)):
            raise ValueError("each day_of_week may appear only once")
        return self


class BusinessHourResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    tenant_id: int
    day_of_week: int
    day: str
    open_time: time | None
    close_time: time | None
    is_closed: bool

    @field_serializer("open_time", "close_time")
    def serialize_time(self, value: time | None) -> str | None:
        return value.strftime("%H:%M") if value is not None else None
