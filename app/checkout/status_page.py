import enum
import logging
from typing import Callable, Mapping, Optional

import httpx

from app.core.config import get_settings

logger = logging.getLogger(__name__)

MSG_INCOMPLETE = "بيانات الدفع غير مكتملة"
MSG_GATEWAY_FAILED = "فشلت عملية الدفع"
MSG_NOT_VERIFIED = "لم يتم التحقق من الدفع"
MSG_ERROR = "حدث خطأ أثناء التحقق من الدفع"


class PageState(str, enum.Enum):
    VERIFYING = "verifying"
    SUCCESS = "success"
    FAILED = "failed"


class PaymentStatusPage:
    """Landing page of the checkout redirect.

    Reads ``id``, ``booking_id`` and ``status`` from the query string and
    settles once on success or failed. A gateway-reported ``failed`` is taken
    at face value; anything else is re-checked through ``verify``.
    """

    def __init__(self, params: Mapping[str, str], verify: Callable[[str, str], dict]):
        self.payment_id = params.get("id")
        self.booking_id = params.get("booking_id")
        self.gateway_status = params.get("status")
        self.verify = verify
        self.state = PageState.VERIFYING
        self.error: Optional[str] = None

    def _fail(self, message: str) -> PageState:
        self.state = PageState.FAILED
        self.error = message
        return self.state

    def load(self) -> PageState:
        if self.state != PageState.VERIFYING:
            return self.state

        if not self.payment_id or not self.booking_id:
            return self._fail(MSG_INCOMPLETE)

        if self.gateway_status == "failed":
            return self._fail(MSG_GATEWAY_FAILED)

        try:
            data = self.verify(self.payment_id, self.booking_id)
        except Exception:
            logger.exception("Payment verification error")
            return self._fail(MSG_ERROR)

        if data and data.get("verified"):
            self.state = PageState.SUCCESS
            return self.state
        return self._fail((data or {}).get("error") or MSG_NOT_VERIFIED)

    def as_dict(self) -> dict:
        return {
            "state": self.state.value,
            "message": self.error,
            "payment_id": self.payment_id,
            "booking_id": self.booking_id
        }


class HttpVerifier:
    """Calls the verify-payment function over HTTP.

    Without ``functions_url`` the ``FUNCTIONS_BASE_URL`` setting is used.
    """

    def __init__(self, functions_url: Optional[str] = None, api_key: Optional[str] = None,
                 client: Optional[httpx.Client] = None, timeout: float = 30.0):
        functions_url = functions_url or get_settings().FUNCTIONS_BASE_URL
        self.url = f"{functions_url.rstrip('/')}/verify-payment"
        self.headers = {"apikey": api_key, "authorization": f"Bearer {api_key}"} if api_key else {}
        self.client = client or httpx.Client(timeout=timeout)

    def __call__(self, payment_id: str, booking_id: str) -> dict:
        response = self.client.post(
            self.url,
            json={"payment_id": payment_id, "booking_id": booking_id},
            headers=self.headers
        )
        response.raise_for_status()
        return response.json()
