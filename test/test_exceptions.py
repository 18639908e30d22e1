"""Error taxonomy and its mapping onto the response envelope."""

import pytest

from boom_booking.exceptions import (
    BookingConflictError,
    BookingNotFoundError,
    BoomBookingError,
    DatabaseError,
    DuplicateResourceError,
    PlanLimitExceededError,
    ResourceNotFoundError,
    RoomNotFoundError,
    TenantContextRequiredError,
    TenantNotFoundError,
    ValidationError,
)
from boom_booking.exception_handlers import get_error_type


@pytest.mark.parametrize(
    ("exc", "status_code"),
    [
        (ValidationError("bad"), 400),
        (TenantContextRequiredError(), 400),
        (TenantNotFoundError(1), 404),
        (RoomNotFoundError(2), 404),
        (BookingNotFoundError(3), 404),
        (DuplicateResourceError("Room", "name", "Room A"), 409),
        (BookingConflictError(room_id=1, conflicting_booking_id=9), 409),
        (PlanLimitExceededError("rooms", current=1, limit=1), 403),
        (DatabaseError(operation="insert"), 500),
    ],
)
def test_status_codes(exc, status_code):
    assert isinstance(exc, BoomBookingError)
    assert exc.status_code == status_code


def test_not_found_carries_empty_data():
    exc = RoomNotFoundError(12)
    assert isinstance(exc, ResourceNotFoundError)
    assert exc.message == "Room with id '12' not found"
    assert exc.data == []
    assert exc.details == {"resource_type": "Room", "resource_id": 12}


def test_tenant_not_found_by_subdomain():
    exc = TenantNotFoundError(subdomain="ghost")
    assert exc.message == "Tenant not found or inactive"
    assert exc.details["subdomain"] == "ghost"


def test_validation_error_field():
    assert ValidationError("bad subdomain", field="subdomain").details == {"field": "subdomain"}


def test_booking_conflict_names_constraint():
    exc = BookingConflictError(room_id=4, conflicting_booking_id=7)
    assert exc.details["constraint"] == "room_time_overlap"
    assert exc.details["conflicting_booking_id"] == 7


def test_error_types():
    assert get_error_type(405) == "Method not allowed"
    assert get_error_type(418) == "Error"
