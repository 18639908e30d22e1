from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from boom_booking.models.tenant import TenantStatus
from boom_booking.plans import PlanType


class TenantCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    subdomain: str = Field(..., min_length=1, max_length=63)
    domain: str | None = None
    plan_type: PlanType = PlanType.free
    settings: dict[str, Any] = Field(default_factory=dict)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v


class TenantUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    subdomain: str | None = Field(None, min_length=1, max_length=63)
    domain: str | None = None
    plan_type: PlanType | None = None
    status: TenantStatus | None = None
    settings: dict[str, Any] | None = None


class TenantStats(BaseModel):
    room_count: int = 0
    booking_count: int = 0


class TenantResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    subdomain: str
    domain: str | None
    plan_type: str
    status: str
    settings: dict[str, Any] | None
    subscription_status: str | None
    trial_ends_at: datetime | None
    created_at: datetime
    updated_at: datetime
    stats: TenantStats | None = None


class TenantSummary(BaseModel):
    """Compact tenant view embedded in subdomain lookups."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    subdomain: str
    domain: str | None
    plan_type: str
    status: str
    settings: dict[str, Any] | None
    created_at: datetime
