"""
Integration tests for the public booking endpoints.
"""
from datetime import datetime

import pytest

from booking.core.exceptions import SlotTakenError
from booking.models import Appointment
from booking.schemas.booking import BookingRequest
from booking.services.appointment.appointment_query_service import AppointmentQueryService
from booking.services.appointment.appointment_service import BookingService


def customer_payload():
    return {
        "first_name": "Jane",
        "last_name": "Doe",
        "email": "jane@example.com",
        "phone": "+15551234567",
    }


def booking_payload(service, target_date, time="09:00", employee_id=None):
    return {
        "service_id": service.serv_id,
        "date": target_date.isoformat(),
        "time": time,
        "employee_id": employee_id,
        "customer": customer_payload(),
    }


class TestServicesEndpoint:

    def test_lists_services(self, client, business, haircut):
        """Test the public service list of a business."""
        response = client.get(f"/api/v1/public/businesses/{business.bus_id}/services")

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert data["services"][0]["serv_name"] == "Haircut"
        assert data["services"][0]["serv_min_duration"] == 30

    def test_unknown_business(self, client, db):
        """Test 404 for a business that does not exist."""
        response = client.get("/api/v1/public/businesses/00000000-0000-0000-0000-000000000000/services")
        assert response.status_code == 404


class TestSlotsEndpoint:

    def test_slots_for_next_monday(self, client, business, haircut, barber, next_monday):
        """Test the slot list for an upcoming Monday."""
        response = client.get(
            f"/api/v1/public/businesses/{business.bus_id}/slots",
            params={"date": next_monday.isoformat(), "service_id": haircut.serv_id},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["date"] == next_monday.isoformat()
        assert [s["time"] for s in data["slots"]] == ["09:00", "09:30", "10:00", "10:30"]
        assert all(s["available"] for s in data["slots"])
        assert data["slots"][0]["employee_name"] == "Ana Silva"
        assert data["stale"] is False

    def test_unknown_service(self, client, business, next_monday):
        """Test 404 for a service the business does not offer."""
        response = client.get(
            f"/api/v1/public/businesses/{business.bus_id}/slots",
            params={"date": next_monday.isoformat(), "service_id": 9999},
        )
        assert response.status_code == 404

    def test_invalid_date(self, client, business, haircut):
        """Test a malformed date is rejected by validation."""
        response = client.get(
            f"/api/v1/public/businesses/{business.bus_id}/slots",
            params={"date": "next monday", "service_id": haircut.serv_id},
        )
        assert response.status_code == 422

    def test_sequence_is_echoed(self, client, business, haircut, barber, next_monday):
        """Test the request sequence number comes back with the result."""
        response = client.get(
            f"/api/v1/public/businesses/{business.bus_id}/slots",
            params={"date": next_monday.isoformat(), "service_id": haircut.serv_id, "seq": 7},
            headers={"X-Client-Key": "browser-1"},
        )

        assert response.json()["seq"] == 7
        assert response.json()["stale"] is False

    def test_overtaken_request_is_flagged_stale(self, client, business, haircut, barber, next_monday):
        """Test a response whose request was overtaken is marked stale and carries no slots."""
        url = f"/api/v1/public/businesses/{business.bus_id}/slots"
        params = {"date": next_monday.isoformat(), "service_id": haircut.serv_id}
        headers = {"X-Client-Key": "browser-1"}

        newer = client.get(url, params={**params, "seq": 2}, headers=headers)
        older = client.get(url, params={**params, "seq": 1}, headers=headers)

        assert newer.json()["stale"] is False
        assert older.json()["stale"] is True
        assert older.json()["slots"] == []


class TestBookingEndpoint:

    def test_confirm_booking(self, client, db, business, haircut, barber, next_monday):
        """Test a booking stores customer and appointment and blocks the slot."""
        response = client.post(
            f"/api/v1/public/businesses/{business.bus_id}/bookings",
            json=booking_payload(haircut, next_monday, "09:30", barber.emp_id),
        )

        assert response.status_code == 201
        data = response.json()
        assert data["employee_id"] == barber.emp_id
        assert data["employee_name"] == "Ana Silva"
        assert data["app_datetime"].startswith(f"{next_monday.isoformat()}T09:30")

        slots = client.get(
            f"/api/v1/public/businesses/{business.bus_id}/slots",
            params={"date": next_monday.isoformat(), "service_id": haircut.serv_id},
        ).json()["slots"]
        assert {s["time"]: s["available"] for s in slots}["09:30"] is False

    def test_double_booking_conflicts(self, client, business, haircut, barber, next_monday):
        """Test booking the same slot twice returns 409 the second time."""
        url = f"/api/v1/public/businesses/{business.bus_id}/bookings"
        payload = booking_payload(haircut, next_monday, "10:00", barber.emp_id)

        first = client.post(url, json=payload)
        second = client.post(url, json=payload)

        assert first.status_code == 201
        assert second.status_code == 409
        assert "just taken" in second.json()["detail"]

    def test_time_not_offered(self, client, business, haircut, barber, next_monday):
        """Test a time outside the employee's window is rejected."""
        response = client.post(
            f"/api/v1/public/businesses/{business.bus_id}/bookings",
            json=booking_payload(haircut, next_monday, "15:00"),
        )
        assert response.status_code == 400

    def test_invalid_customer_email(self, client, business, haircut, barber, next_monday):
        """Test customer details are validated before anything is stored."""
        payload = booking_payload(haircut, next_monday)
        payload["customer"]["email"] = "not-an-email"

        response = client.post(f"/api/v1/public/businesses/{business.bus_id}/bookings", json=payload)
        assert response.status_code == 422

    def test_invalid_time_format(self, client, business, haircut, barber, next_monday):
        """Test a slot time must be HH:MM."""
        response = client.post(
            f"/api/v1/public/businesses/{business.bus_id}/bookings",
            json=booking_payload(haircut, next_monday, "9 o'clock"),
        )
        assert response.status_code == 422


class TestConcurrentBooking:

    def test_unique_constraint_reports_slot_taken(self, db, business, haircut, barber, next_monday, monkeypatch):
        """Test a booking that passes the availability check but loses the race raises SlotTakenError."""
        request = BookingRequest(**booking_payload(haircut, next_monday, "09:00", barber.emp_id))
        early = datetime.combine(next_monday, datetime.min.time())

        BookingService.confirm_booking(db, business.bus_id, request, now=early)

        # Second request does not see the first appointment, as if both checked at once
        monkeypatch.setattr(
            AppointmentQueryService, "get_booked_datetimes", staticmethod(lambda *args, **kwargs: [])
        )

        with pytest.raises(SlotTakenError):
            BookingService.confirm_booking(db, business.bus_id, request, now=early)

        assert db.query(Appointment).count() == 1
