import httpx
from sqlalchemy.exc import OperationalError

from doctors_portal.api.deps import get_notifier
from doctors_portal.models.booking import Booking
from doctors_portal.services.booking_service import BookingService
from doctors_portal.services.notification import EmailNotifier
from tests.conftest import make_settings

booking_data = {
    "treatment": "Cleaning",
    "date": "2024-01-01",
    "slot": "10am",
    "patient": "a@x.com",
    "patientName": "Alice"
}


class TestCreateBooking:

    def test_create_then_duplicate(self, client, db, notifier):
        """Booking the same treatment and day twice keeps one record."""
        first = client.post("/bookingInfo", json=booking_data)
        assert first.status_code == 200
        assert first.json()["success"] is True
        assert first.json()["result"]["inserted_id"] is not None

        second = client.post("/bookingInfo", json=dict(booking_data, slot="11am"))
        assert second.status_code == 200
        data = second.json()
        assert data["success"] is False
        assert data["bookingInfo"]["slot"] == "10am"
        assert data["bookingInfo"]["patientName"] == "Alice"

        assert db.query(Booking).filter(
            Booking.treatment == "Cleaning",
            Booking.date == "2024-01-01",
            Booking.patient == "a@x.com"
        ).count() == 1

        # Only the created booking is announced
        assert len(notifier.sent) == 1
        assert notifier.sent[0].patient == "a@x.com"

    def test_missing_fields(self, client):
        response = client.post("/bookingInfo", json={"treatment": "Cleaning"})
        assert response.status_code == 422

    def test_invalid_patient_email(self, client):
        response = client.post("/bookingInfo", json=dict(booking_data, patient="not-an-email"))
        assert response.status_code == 422

    def test_oversized_fields_rejected(self, client, db):
        """Values longer than their columns are a 422, not a storage error."""
        response = client.post("/bookingInfo", json=dict(booking_data, treatment="x" * 101))
        assert response.status_code == 422

        response = client.post("/bookingInfo", json=dict(booking_data, phone="1" * 31))
        assert response.status_code == 422
        assert db.query(Booking).count() == 0

    def test_email_failure_does_not_fail_booking(self, app, client, db):
        """A failing email provider leaves the booking response untouched."""
        email_settings = make_settings(EMAIL_SENDER="clinic@x.com", EMAIL_SENDER_KEY="key")
        requests = []

        def failing_provider(request):
            requests.append(request)
            return httpx.Response(500, json={"errors": ["down"]})

        failing = EmailNotifier(email_settings, transport=httpx.MockTransport(failing_provider))
        app.dependency_overrides[get_notifier] = lambda: failing

        response = client.post("/bookingInfo", json=booking_data)

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert len(requests) == 1
        assert db.query(Booking).count() == 1


class TestListBookings:

    def test_mixed_case_email_round_trip(self, client, auth_headers):
        """The patient address is stored exactly as submitted."""
        email = "Alice@Example.COM"
        client.post("/bookingInfo", json=dict(booking_data, patient=email))

        response = client.get("/bookingInfo", params={"email": email}, headers=auth_headers(email))
        assert response.status_code == 200
        bookings = response.json()
        assert len(bookings) == 1
        assert bookings[0]["patient"] == email

    def test_own_bookings(self, client, add_booking, auth_headers):
        add_booking("Cleaning", "2024-01-01", "9am", "a@x.com", "Alice")
        add_booking("Cleaning", "2024-01-01", "10am", "b@x.com", "Bob")

        response = client.get("/bookingInfo", params={"email": "a@x.com"}, headers=auth_headers("a@x.com"))
        assert response.status_code == 200
        bookings = response.json()
        assert len(bookings) == 1
        assert bookings[0]["patient"] == "a@x.com"
        assert bookings[0]["patientName"] == "Alice"

    def test_other_patients_bookings_forbidden(self, client, add_booking, auth_headers):
        add_booking("Cleaning", "2024-01-01", "9am", "b@x.com", "Bob")

        response = client.get("/bookingInfo", params={"email": "b@x.com"}, headers=auth_headers("a@x.com"))
        assert response.status_code == 403

    def test_requires_token(self, client):
        response = client.get("/bookingInfo", params={"email": "a@x.com"})
        assert response.status_code == 401


class TestServicesAndAvailability:

    def test_services_list_templates(self, client, add_service):
        add_service("Cleaning", ["9am", "10am"])

        response = client.get("/services")
        assert response.status_code == 200
        assert response.json()[0]["name"] == "Cleaning"
        assert response.json()[0]["slots"] == ["9am", "10am"]

    def test_available_removes_booked_slots(self, client, add_service):
        add_service("Cleaning", ["9am", "10am", "11am"])
        client.post("/bookingInfo", json=booking_data)

        response = client.get("/available", params={"date": "2024-01-01"})
        assert response.status_code == 200
        assert [(s["name"], s["slots"]) for s in response.json()] == [("Cleaning", ["9am", "11am"])]

        # The template served by /services is unchanged
        assert client.get("/services").json()[0]["slots"] == ["9am", "10am", "11am"]

    def test_available_other_date(self, client, add_service):
        add_service("Cleaning", ["9am", "10am", "11am"])
        client.post("/bookingInfo", json=booking_data)

        response = client.get("/available", params={"date": "2024-01-02"})
        assert response.json()[0]["slots"] == ["9am", "10am", "11am"]

    def test_available_requires_date(self, client):
        assert client.get("/available").status_code == 422


class TestMisc:

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert "running" in response.text

    def test_health(self, client):
        assert client.get("/health").json()["status"] == "healthy"

    def test_storage_failure_is_503(self, client, monkeypatch):
        """An unavailable data store surfaces as 503."""
        def unavailable(self, date):
            raise OperationalError("SELECT 1", {}, Exception("connection refused"))

        monkeypatch.setattr(BookingService, "available_slots", unavailable)

        response = client.get("/available", params={"date": "2024-01-01"})
        assert response.status_code == 503
        assert response.json()["error"] == "Service Unavailable"

    def test_unknown_path(self, client):
        response = client.get("/nowhere")
        assert response.status_code == 404
        assert response.json()["error"] == "Not Found"

    def test_default_catalog_seeded_on_startup(self):
        from fastapi.testclient import TestClient
        from doctors_portal.main import create_app
        from doctors_portal.services.catalog_service import DEFAULT_SERVICES

        seeded_app = create_app(make_settings(SEED_DEFAULT_SERVICES=True))
        with TestClient(seeded_app) as seeded_client:
            services = seeded_client.get("/services").json()

        assert sorted(s["name"] for s in services) == sorted(s["name"] for s in DEFAULT_SERVICES)
        assert all(len(s["slots"]) == 12 for s in services)
