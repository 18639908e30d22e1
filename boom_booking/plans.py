"""
Subscription plans and their resource limits.

A limit of ``UNLIMITED`` (-1) means the plan places no cap on the resource.
Unknown plan names fall back to the free plan.
"""

import enum
from dataclasses import dataclass

UNLIMITED = -1


class PlanType(str, enum.Enum):
    free = "free"
    basic = "basic"
    pro = "pro"
    business = "business"


class ResourceType(str, enum.Enum):
    rooms = "rooms"
    bookings = "bookings"


PLAN_LIMITS: dict[str, dict[str, int]] = {
    PlanType.free.value: {"rooms": 1, "bookings": 50},
    PlanType.basic.value: {"rooms": 5, "bookings": 500},
    PlanType.pro.value: {"rooms": 20, "bookings": 2000},
    PlanType.business.value: {"rooms": UNLIMITED, "bookings": UNLIMITED},
}


def get_plan_limits(plan_type: str | None) -> dict[str, int]:
    return dict(PLAN_LIMITS.get(plan_type or "", PLAN_LIMITS[PlanType.free.value]))


@dataclass(frozen=True)
class LimitCheck:
    resource_type: str
    plan_type: str
    current_usage: int
    requested_count: int
    limit: int

    @property
    def would_exceed_limit(self) -> bool:
        return self.limit != UNLIMITED and self.current_usage + self.requested_count > self.limit

    @property
    def can_proceed(self) -> bool:
        return not self.would_exceed_limit

    @property
    def remaining(self) -> int:
        if self.limit == UNLIMITED:
            return UNLIMITED
        return max(0, self.limit - self.current_usage)

    def as_dict(self) -> dict:
        return {
            "resource_type": self.resource_type,
            "plan_type": self.plan_type,
            "can_proceed": self.can_proceed,
            "current_usage": self.current_usage,
            "requested_count": self.requested_count,
            "limit": self.limit,
            "remaining": self.remaining,
            "would_exceed_limit": self.would_exceed_limit,
            "needs_upgrade": self.would_exceed_limit,
            "limits": get_plan_limits(self.plan_type),
        }


def check_limit(plan_type: str | None, resource_type: str, current_usage: int, requested_count: int = 1) -> LimitCheck:
    limits = get_plan_limits(plan_type)
    return LimitCheck(
        resource_type=resource_type,
        plan_type=plan_type if plan_type in PLAN_LIMITS else PlanType.free.value,
        current_usage=current_usage,
        requested_count=requested_count,
        limit=limits[resource_type],
    )


def limit_reached(limit: int, current: int) -> bool:
    return limit != UNLIMITED and current >= limit
