import logging
from typing import Optional

import requests

logger = logging.getLogger(__name__)

WIDGET_SCRIPT_URL = "https://cdn.moyasar.com/mpf/1.14.0/moyasar.js"
WIDGET_CSS_URL = "https://cdn.moyasar.com/mpf/1.14.0/moyasar.css"
WIDGET_METHODS = ["creditcard", "applepay", "stcpay"]
CURRENCY = "SAR"


class GatewayError(Exception):
    """Non-success answer (or no answer) from the Moyasar API"""

    def __init__(self, status_code: Optional[int], body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Moyasar error {status_code}: {body}")

    @property
    def accepted(self) -> bool:
        """The gateway answered 2xx but the body could not be read"""
        return self.status_code is not None and 200 <= self.status_code < 300


class MoyasarClient:
    """Thin wrapper around the Moyasar REST API.

    Requests authenticate with HTTP Basic auth using the secret key as the
    username and an empty password. Every call is attempted once.
    """

    def __init__(self, secret_key: str, base_url: str = "https://api.moyasar.com", timeout: float = 30.0):
        self.secret_key = secret_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _request(self, method: str, path: str, payload: dict = None) -> dict:
        try:
            response = requests.request(
                method,
                f"{self.base_url}{path}",
                auth=(self.secret_key, ""),
                json=payload,
                timeout=self.timeout
            )
        except requests.RequestException as e:
            raise GatewayError(None, str(e)) from e

        if not response.ok:
            raise GatewayError(response.status_code, response.text)

        try:
            data = response.json()
        except ValueError:
            data = None
        if not isinstance(data, dict):
            raise GatewayError(response.status_code, response.text)
        return data

    def fetch_payment(self, payment_id: str) -> dict:
        """GET /v1/payments/{id} -> {id, status, amount, currency, ...}"""
        return self._request("GET", f"/v1/payments/{payment_id}")

    def refund_payment(self, payment_id: str, amount) -> dict:
        """POST /v1/payments/{id}/refund -> refunded payment, {id, ...}"""
        return self._request("POST", f"/v1/payments/{payment_id}/refund", {"amount": amount})

    def create_payment(self, amount: int, description: str, callback_url: str, source: dict,
                       currency: str = CURRENCY, metadata: dict = None) -> dict:
        payload = {
            "amount": amount,
            "currency": currency,
            "description": description,
            "callback_url": callback_url,
            "source": source,
            "metadata": metadata or {}
        }
        return self._request("POST", "/v1/payments", payload)


def to_halalas(amount) -> int:
    return int(round(float(amount) * 100))


def build_callback_url(status_page_url: str, booking_id: str) -> str:
    return f"{status_page_url}?booking_id={booking_id}"


def build_widget_config(*, amount, booking_id: str, publishable_key: str, status_page_url: str,
                        description: str = "دفع حجز", element: str = "#moyasar-payment-form") -> dict:
    """Init parameters for the hosted payment form.

    ``amount`` is in SAR; the widget expects halalas. When the payer submits,
    the widget appends ``id`` and ``status`` to the callback URL and navigates
    there.
    """
    return {
        "element": element,
        "amount": to_halalas(amount),
        "currency": CURRENCY,
        "description": f"{description} - {booking_id}",
        "publishable_api_key": publishable_key,
        "callback_url": build_callback_url(status_page_url, booking_id),
        "methods": list(WIDGET_METHODS),
        "fixed_width": False
    }
