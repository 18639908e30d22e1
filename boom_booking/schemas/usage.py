from enum import Enum

from pydantic import BaseModel, Field

from boom_booking.plans import ResourceType


class UsagePeriod(str, Enum):
    current_month = "current_month"
    current_year = "current_year"
    last_30_days = "last_30_days"
    all = "all"


class UsageCheckRequest(BaseModel):
    resource_type: ResourceType
    resource_count: int = Field(1, ge=1)
