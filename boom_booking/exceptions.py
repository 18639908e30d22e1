"""
Exception classes for the booking API

Every error raised by services and dependencies derives from
BoomBookingError, which carries the HTTP status and the details that the
exception handlers turn into a ``success: false`` envelope.
"""

from typing import Any

from fastapi import status


class BoomBookingError(Exception):
    """Base exception class for all booking API errors"""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: dict[str, Any] | None = None,
        data: Any = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.data = data
        super().__init__(self.message)


# ============================================================================
# Validation Exceptions
# ============================================================================


class ValidationError(BoomBookingError):
    """Raised when input validation fails"""

    def __init__(self, message: str, field: str | None = None, details: dict[str, Any] | None = None):
        error_details = details or {}
        if field:
            error_details["field"] = field
        super().__init__(message=message, status_code=status.HTTP_400_BAD_REQUEST, details=error_details)


class TenantContextRequiredError(BoomBookingError):
    """Raised when a tenant-scoped request carries neither tenant_id nor a tenant subdomain"""

    def __init__(self, message: str = "Tenant context is required"):
        super().__init__(message=message, status_code=status.HTTP_400_BAD_REQUEST)


# ============================================================================
# Resource Not Found Exceptions
# ============================================================================


class ResourceNotFoundError(BoomBookingError):
    """Base class for resource not found errors"""

    def __init__(self, resource_type: str, resource_id: Any | None = None, message: str | None = None):
        if message is None:
            message = f"{resource_type} not found"
            if resource_id is not None:
                message = f"{resource_type} with id '{resource_id}' not found"
        details = {"resource_type": resource_type}
        if resource_id is not None:
            details["resource_id"] = resource_id
        super().__init__(message=message, status_code=status.HTTP_404_NOT_FOUND, details=details, data=[])


class TenantNotFoundError(ResourceNotFoundError):
    """Raised when a tenant id or subdomain does not resolve to an active tenant"""

    def __init__(self, tenant_id: Any | None = None, subdomain: str | None = None):
        super().__init__(resource_type="Tenant", resource_id=tenant_id, message="Tenant not found or inactive")
        if subdomain is not None:
            self.details["subdomain"] = subdomain


class RoomNotFoundError(ResourceNotFoundError):
    def __init__(self, room_id: Any | None = None):
        super().__init__(resource_type="Room", resource_id=room_id)


class BookingNotFoundError(ResourceNotFoundError):
    def __init__(self, booking_id: Any | None = None):
        super().__init__(resource_type="Booking", resource_id=booking_id)


# ============================================================================
# Conflict & Business Rule Exceptions
# ============================================================================


class DuplicateResourceError(BoomBookingError):
    """Raised when attempting to create a duplicate resource"""

    def __init__(self, resource_type: str, field: str, value: Any):
        super().__init__(
            message=f"{resource_type} with {field} '{value}' already exists",
            status_code=status.HTTP_409_CONFLICT,
            details={"resource_type": resource_type, "field": field, "value": value},
        )


class BookingConflictError(BoomBookingError):
    """Raised when a booking overlaps another booking of the same room"""

    def __init__(self, room_id: int, conflicting_booking_id: int):
        super().__init__(
            message="Time slot conflicts with existing booking",
            status_code=status.HTTP_409_CONFLICT,
            details={
                "constraint": "room_time_overlap",
                "room_id": room_id,
                "conflicting_booking_id": conflicting_booking_id,
            },
        )


class PlanLimitExceededError(BoomBookingError):
    """Raised when a create would push a tenant past its plan limit"""

    def __init__(self, resource_type: str, current: int, limit: int, requested: int = 1, plan_type: str | None = None):
        super().__init__(
            message=f"{resource_type} limit exceeded. Current: {current}, Limit: {limit}, Requested: {requested}",
            status_code=status.HTTP_403_FORBIDDEN,
            details={
                "resource_type": resource_type,
                "current_usage": current,
                "limit": limit,
                "requested_count": requested,
                "plan_type": plan_type,
            },
        )


# ============================================================================
# Database Exceptions
# ============================================================================


class DatabaseError(BoomBookingError):
    """Raised when a database operation fails"""

    def __init__(self, message: str = "A database error occurred", operation: str | None = None):
        details = {"operation": operation} if operation else {}
        super().__init__(message=message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, details=details)
