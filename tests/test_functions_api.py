import types

from app.core.dependencies import get_gateway
from app.main import app
from app.models import PaymentStatus
from app.services import moyasar
from app.services.moyasar import GatewayError, MoyasarClient

VERIFY_URL = "/functions/v1/verify-payment"
REFUND_URL = "/functions/v1/process-refund"


def test_verify_payment_scenario(client, gateway, db, hall_booking):
    gateway.payments["p1"] = {"status": "paid", "amount": 100, "id": "p1"}

    response = client.post(VERIFY_URL, json={"payment_id": "p1", "booking_id": "b1"})

    assert response.status_code == 200
    assert response.json() == {"verified": True, "payment_id": "p1"}
    db.refresh(hall_booking)
    assert hall_booking.payment_status == PaymentStatus.PAID
    assert hall_booking.payment_id == "p1"
    assert hall_booking.amount == 100


def test_verify_failed_charge_scenario(client, gateway, db, hall_booking):
    gateway.payments["p1"] = {"status": "failed"}

    response = client.post(VERIFY_URL, json={"payment_id": "p1", "booking_id": "b1"})

    assert response.status_code == 200
    assert response.json() == {"verified": False, "error": "Payment status: failed"}
    db.refresh(hall_booking)
    assert hall_booking.payment_status == PaymentStatus.UNPAID
    assert hall_booking.payment_id is None


def test_verify_missing_parameters(client):
    response = client.post(VERIFY_URL, json={"payment_id": "p1"})

    assert response.status_code == 400
    assert response.json() == {"verified": False, "error": "Missing payment_id or booking_id"}


def test_verify_without_secret_key(client, hall_booking):
    app.dependency_overrides[get_gateway] = lambda: None

    response = client.post(VERIFY_URL, json={"payment_id": "p1", "booking_id": "b1"})

    assert response.status_code == 500
    assert response.json() == {"verified": False, "error": "Payment service not configured"}


def test_verify_upstream_failure_is_generic(client, gateway, hall_booking):
    gateway.fetch_error = GatewayError(500, "upstream exploded at node-7")

    response = client.post(VERIFY_URL, json={"payment_id": "p1", "booking_id": "b1"})

    assert response.status_code == 400
    assert response.json() == {"verified": False, "error": "Failed to verify payment with Moyasar"}
    assert "node-7" not in response.text


def test_unexpected_error_becomes_internal_server_error(client, gateway, hall_booking):
    gateway.fetch_error = RuntimeError("boom")

    response = client.post(VERIFY_URL, json={"payment_id": "p1", "booking_id": "b1"})

    assert response.status_code == 500
    assert response.json() == {"verified": False, "error": "Internal server error"}


def test_refund_scenario(client, gateway, db, paid_hall_booking):
    response = client.post(REFUND_URL, json={"booking_id": "b1", "booking_type": "hall"})

    assert response.status_code == 200
    assert response.json() == {"success": True, "refund_id": "r1"}
    db.refresh(paid_hall_booking)
    assert paid_hall_booking.payment_status == PaymentStatus.REFUNDED


def test_refund_not_found(client, hall):
    response = client.post(REFUND_URL, json={"booking_id": "nope", "booking_type": "hall"})

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Booking not found"}


def test_refund_unpaid_booking(client, gateway, hall_booking):
    response = client.post(REFUND_URL, json={"booking_id": "b1", "booking_type": "hall"})

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "No paid payment to refund"}
    assert gateway.refund_calls == []


def test_refund_rejected_by_gateway(client, gateway, paid_hall_booking):
    gateway.refund_error = GatewayError(400, "Refund amount exceeds captured amount")

    response = client.post(REFUND_URL, json={"booking_id": "b1", "booking_type": "hall"})

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Failed to process refund"}


def test_refund_missing_parameters(client):
    response = client.post(REFUND_URL, json={"booking_id": "b1"})

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_preflight_carries_cors_headers(client):
    for url in (VERIFY_URL, REFUND_URL):
        response = client.options(url)

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"
        assert "x-client-info" in response.headers["access-control-allow-headers"]


def test_every_function_response_carries_cors_headers(client, gateway, hall_booking):
    gateway.payments["p1"] = {"status": "failed"}

    ok = client.post(VERIFY_URL, json={"payment_id": "p1", "booking_id": "b1"})
    bad = client.post(VERIFY_URL, json={})

    for response in (ok, bad):
        assert response.headers["access-control-allow-origin"] == "*"
        assert "apikey" in response.headers["access-control-allow-headers"]


def test_malformed_body_is_rejected_with_cors_headers(client):
    response = client.post(VERIFY_URL, content="not json", headers={"content-type": "application/json"})

    assert response.status_code == 400
    assert response.json() == {"verified": False, "error": "Invalid request body"}
    assert response.headers["access-control-allow-origin"] == "*"


def test_malformed_body_keeps_success_contract(client):
    for url in (REFUND_URL, "/functions/v1/verify-site-access"):
        response = client.post(url, content="not json", headers={"content-type": "application/json"})

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Invalid request body"}
        assert response.headers["access-control-allow-origin"] == "*"


def test_refund_accepted_with_html_reply_marks_booking_refunded(client, db, paid_hall_booking, monkeypatch):
    def html_reply(method, url, **kwargs):
        def not_json():
            raise ValueError("Expecting value")

        return types.SimpleNamespace(status_code=200, ok=True, text="<html>ok</html>", json=not_json)

    monkeypatch.setattr(moyasar.requests, "request", html_reply)
    app.dependency_overrides[get_gateway] = lambda: MoyasarClient("sk_test_123")

    response = client.post(REFUND_URL, json={"booking_id": "b1", "booking_type": "hall"})

    assert response.status_code == 200
    assert response.json() == {"success": True}
    db.refresh(paid_hall_booking)
    assert paid_hall_booking.payment_status == PaymentStatus.REFUNDED
