"""
Booking API tests

Overlap uses half-open intervals per room; cancelled bookings never block.
"""

from conftest import BOOKING_DAY, booking_payload, create_room, create_tenant


def _book(client, tenant_id, payload):
    return client.post("/api/bookings", params={"tenant_id": tenant_id}, json=payload)


class TestCreateBooking:
    def test_create_prices_booking(self, client, tenant, room):
        response = _book(client, tenant["id"], booking_payload(room["id"], "18:00", "20:00"))
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["status"] == "confirmed"
        assert data["total_price"] == 50.0
        assert data["room"]["name"] == room["name"]
        assert data["start_time"] == f"{BOOKING_DAY}T18:00:00"

    def test_partial_hours_are_prorated(self, client, tenant, room):
        data = _book(client, tenant["id"], booking_payload(room["id"], "18:00", "19:30")).json()["data"]
        assert data["total_price"] == 37.5

    def test_end_before_start_rejected(self, client, tenant, room):
        response = _book(client, tenant["id"], booking_payload(room["id"], "20:00", "18:00"))
        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_zero_length_rejected(self, client, tenant, room):
        response = _book(client, tenant["id"], booking_payload(room["id"], "18:00", "18:00"))
        assert response.status_code == 400

    def test_overlap_conflict(self, client, tenant, room):
        first = _book(client, tenant["id"], booking_payload(room["id"], "18:00", "20:00")).json()["data"]
        response = _book(client, tenant["id"], booking_payload(room["id"], "19:00", "21:00"))
        assert response.status_code == 409
        body = response.json()
        assert body["error"] == "Time slot conflicts with existing booking"
        assert body["details"]["conflicting_booking_id"] == first["id"]

    def test_adjacent_slots_do_not_conflict(self, client, tenant, room):
        assert _book(client, tenant["id"], booking_payload(room["id"], "18:00", "20:00")).status_code == 201
        assert _book(client, tenant["id"], booking_payload(room["id"], "20:00", "22:00")).status_code == 201

    def test_other_room_does_not_conflict(self, client, tenant, room):
        second = create_room(client, tenant["id"], name="Room B")
        assert _book(client, tenant["id"], booking_payload(room["id"])).status_code == 201
        assert _book(client, tenant["id"], booking_payload(second["id"])).status_code == 201

    def test_cancelled_booking_frees_slot(self, client, tenant, room):
        first = _book(client, tenant["id"], booking_payload(room["id"])).json()["data"]
        client.put(
            "/api/bookings",
            params={"tenant_id": tenant["id"], "id": first["id"]},
            json={"status": "cancelled"},
        )
        assert _book(client, tenant["id"], booking_payload(room["id"])).status_code == 201

    def test_room_of_other_tenant_is_not_found(self, client, tenant, room):
        other = create_tenant(client, subdomain="other-stage", plan_type="pro")
        response = _book(client, other["id"], booking_payload(room["id"]))
        assert response.status_code == 404
        assert response.json()["details"]["resource_type"] == "Room"

    def test_inactive_room_is_not_bookable(self, client, tenant, room):
        client.delete("/api/rooms", params={"tenant_id": tenant["id"], "id": room["id"]})
        assert _book(client, tenant["id"], booking_payload(room["id"])).status_code == 404

    def test_invalid_email(self, client, tenant, room):
        response = _book(client, tenant["id"], booking_payload(room["id"], customer_email="not-an-email"))
        assert response.status_code == 400

    def test_timezone_aware_times_stored_as_utc(self, client, tenant, room):
        payload = booking_payload(room["id"])
        payload["start_time"] = f"{BOOKING_DAY}T18:00:00+02:00"
        payload["end_time"] = f"{BOOKING_DAY}T19:00:00+02:00"
        data = _book(client, tenant["id"], payload).json()["data"]
        assert data["start_time"] == f"{BOOKING_DAY}T16:00:00"


class TestListBookings:
    def test_filters(self, client, tenant, room):
        second = create_room(client, tenant["id"], name="Room B")
        a = _book(client, tenant["id"], booking_payload(room["id"], "18:00", "19:00")).json()["data"]
        b = _book(client, tenant["id"], booking_payload(second["id"], "18:00", "19:00")).json()["data"]
        c = _book(client, tenant["id"], booking_payload(room["id"], day="2030-01-16")).json()["data"]

        def ids(**params):
            response = client.get("/api/bookings", params={"tenant_id": tenant["id"], **params})
            assert response.status_code == 200
            return sorted(row["id"] for row in response.json()["data"])

        assert ids() == sorted([a["id"], b["id"], c["id"]])
        assert ids(room_id=room["id"]) == sorted([a["id"], c["id"]])
        assert ids(date=BOOKING_DAY) == sorted([a["id"], b["id"]])
        assert ids(id=b["id"]) == [b["id"]]
        assert ids(status="cancelled") == []

    def test_invalid_date(self, client, tenant):
        response = client.get("/api/bookings", params={"tenant_id": tenant["id"], "date": "15/01/2030"})
        assert response.status_code == 400

    def test_tenant_isolation(self, client, tenant, room):
        _book(client, tenant["id"], booking_payload(room["id"]))
        other = create_tenant(client, subdomain="other-stage", plan_type="pro")
        response = client.get("/api/bookings", params={"tenant_id": other["id"]})
        assert response.json()["data"] == []


class TestUpdateBooking:
    def test_move_recomputes_price(self, client, tenant, room):
        booking = _book(client, tenant["id"], booking_payload(room["id"], "18:00", "19:00")).json()["data"]
        response = client.put(
            "/api/bookings",
            params={"tenant_id": tenant["id"], "id": booking["id"]},
            json={"end_time": f"{BOOKING_DAY}T21:00:00"},
        )
        assert response.status_code == 200
        assert response.json()["data"]["total_price"] == 75.0

    def test_update_does_not_conflict_with_itself(self, client, tenant, room):
        booking = _book(client, tenant["id"], booking_payload(room["id"], "18:00", "20:00")).json()["data"]
        response = client.put(
            "/api/bookings",
            params={"tenant_id": tenant["id"], "id": booking["id"]},
            json={"start_time": f"{BOOKING_DAY}T19:00:00", "end_time": f"{BOOKING_DAY}T21:00:00"},
        )
        assert response.status_code == 200

    def test_update_into_other_booking_conflicts(self, client, tenant, room):
        _book(client, tenant["id"], booking_payload(room["id"], "18:00", "20:00"))
        later = _book(client, tenant["id"], booking_payload(room["id"], "20:00", "22:00")).json()["data"]
        response = client.put(
            "/api/bookings",
            params={"tenant_id": tenant["id"], "id": later["id"]},
            json={"start_time": f"{BOOKING_DAY}T19:00:00"},
        )
        assert response.status_code == 409

    def test_merged_range_must_stay_valid(self, client, tenant, room):
        booking = _book(client, tenant["id"], booking_payload(room["id"], "18:00", "20:00")).json()["data"]
        response = client.put(
            "/api/bookings",
            params={"tenant_id": tenant["id"], "id": booking["id"]},
            json={"start_time": f"{BOOKING_DAY}T21:00:00"},
        )
        assert response.status_code == 400

    def test_missing_booking(self, client, tenant):
        response = client.put(
            "/api/bookings",
            params={"tenant_id": tenant["id"], "id": 777},
            json={"notes": "hello"},
        )
        assert response.status_code == 404


class TestDeleteBooking:
    def test_hard_delete(self, client, tenant, room):
        booking = _book(client, tenant["id"], booking_payload(room["id"])).json()["data"]
        response = client.delete("/api/bookings", params={"tenant_id": tenant["id"], "id": booking["id"]})
        assert response.status_code == 200
        assert client.get("/api/bookings", params={"tenant_id": tenant["id"]}).json()["data"] == []
        assert _book(client, tenant["id"], booking_payload(room["id"])).status_code == 201

    def test_delete_other_tenants_booking(self, client, tenant, room):
        booking = _book(client, tenant["id"], booking_payload(room["id"])).json()["data"]
        other = create_tenant(client, subdomain="other-stage", plan_type="pro")
        response = client.delete("/api/bookings", params={"tenant_id": other["id"], "id": booking["id"]})
        assert response.status_code == 404
