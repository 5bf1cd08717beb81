import os

# Set testing environment variable before the app module is imported
os.environ["TESTING"] = "1"

import pytest
from fastapi.testclient import TestClient

from doctors_portal.api.deps import get_notifier
from doctors_portal.core.config import Settings
from doctors_portal.core.security import UserRole, create_access_token
from doctors_portal.main import create_app
from doctors_portal.models.booking import Booking
from doctors_portal.models.service import Service
from doctors_portal.models.user import User


def make_settings(**overrides) -> Settings:
    values = {
        "TESTING": True,
        "TEST_DATABASE_URL": "sqlite://",
        "ACCESS_TOKEN_SECRET": "test-secret",
        "SEED_DEFAULT_SERVICES": False,
        "EMAIL_SENDER": None,
        "EMAIL_SENDER_KEY": None,
    }
    values.update(overrides)
    return Settings(**values)


class RecordingNotifier:
    """Stands in for the email notifier and remembers what it was asked to send."""

    def __init__(self):
        self.sent = []

    async def send_appointment_email(self, booking):
        self.sent.append(booking)
        return True


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def app(settings, notifier):
    application = create_app(settings)
    application.dependency_overrides[get_notifier] = lambda: notifier
    return application


@pytest.fixture
def client(app):
    with TestClient(app, base_url="http://testserver") as test_client:
        yield test_client


@pytest.fixture
def db(client, app):
    session = app.state.database.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def auth_headers(settings):
    def _headers(email):
        token = create_access_token(email, settings=settings)
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
def add_user(db):
    def _add(email, role=UserRole.NONE, name=None):
        user = User(email=email, name=name, role=role, profile={})
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _add


@pytest.fixture
def admin_email(add_user):
    add_user("admin@example.com", role=UserRole.ADMIN, name="Admin")
    return "admin@example.com"


@pytest.fixture
def add_service(db):
    def _add(name, slots):
        service = Service(name=name, slots=list(slots))
        db.add(service)
        db.commit()
        db.refresh(service)
        return service
    return _add


@pytest.fixture
def add_booking(db):
    def _add(treatment, date, slot, patient, patient_name="Patient"):
        booking = Booking(
            treatment=treatment,
            date=date,
            slot=slot,
            patient=patient,
            patient_name=patient_name
        )
        db.add(booking)
        db.commit()
        db.refresh(booking)
        return booking
    return _add
