from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import Settings, get_settings
from app.core.dependencies import get_gateway
from app.core.security import create_access_token
from app.database import Base, get_db
from app.main import app
from app.models import Hall, HallBooking, PaymentStatus, ServiceBooking, ServiceProvider
from app.services.moyasar import GatewayError

JWT_SECRET = "test-jwt-secret"


class FakeGateway:
    """In-memory stand-in for MoyasarClient"""

    def __init__(self):
        self.payments = {}
        self.refund_response = {"id": "r1"}
        self.fetch_error = None
        self.refund_error = None
        self.fetch_calls = []
        self.refund_calls = []

    def fetch_payment(self, payment_id):
        self.fetch_calls.append(payment_id)
        if self.fetch_error:
            raise self.fetch_error
        if payment_id not in self.payments:
            raise GatewayError(404, '{"type":"api_error","message":"Object not found"}')
        return self.payments[payment_id]

    def refund_payment(self, payment_id, amount):
        self.refund_calls.append((payment_id, amount))
        if self.refund_error:
            raise self.refund_error
        return self.refund_response


@pytest.fixture
def db():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def test_settings():
    return Settings(
        MOYASAR_SECRET_KEY="sk_test_123",
        MOYASAR_PUBLISHABLE_KEY="pk_test_123",
        JWT_SECRET=JWT_SECRET,
        FRONTEND_URL="https://app.test",
        SITE_ACCESS_PASSWORD="open-sesame",
    )


@pytest.fixture
def client(db, gateway, test_settings):
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_gateway] = lambda: gateway
    app.dependency_overrides[get_settings] = lambda: test_settings
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def auth_headers(user_id):
    token = create_access_token({"sub": user_id, "role": "authenticated"}, JWT_SECRET)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def hall(db):
    hall = Hall(id="h1", owner_id="owner-1", name_ar="قاعة الورود", city="الرياض", price=5000.0)
    db.add(hall)
    db.commit()
    return hall


@pytest.fixture
def provider(db):
    provider = ServiceProvider(id="sp1", owner_id="owner-2", name_ar="استوديو النور", category="photography")
    db.add(provider)
    db.commit()
    return provider


@pytest.fixture
def hall_booking(db, hall):
    booking = HallBooking(
        id="b1",
        hall_id=hall.id,
        user_id="user-1",
        booking_date=date(2026, 12, 1),
        total_price=5000.0,
        amount=500000,
        payment_status=PaymentStatus.UNPAID,
    )
    db.add(booking)
    db.commit()
    return booking


@pytest.fixture
def service_booking(db, provider):
    booking = ServiceBooking(
        id="s1",
        provider_id=provider.id,
        user_id="user-1",
        booking_date=date(2026, 12, 1),
        total_price=1200.0,
        amount=120000,
        payment_status=PaymentStatus.UNPAID,
    )
    db.add(booking)
    db.commit()
    return booking


@pytest.fixture
def paid_hall_booking(db, hall_booking):
    hall_booking.payment_status = PaymentStatus.PAID
    hall_booking.payment_id = "p1"
    hall_booking.amount = 100
    db.commit()
    return hall_booking
