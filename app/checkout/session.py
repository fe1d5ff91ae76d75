import enum
import logging
from typing import Callable, Optional
from urllib.parse import urlencode

from app.services.moyasar import WIDGET_CSS_URL, WIDGET_SCRIPT_URL, build_widget_config

logger = logging.getLogger(__name__)


class CheckoutState(str, enum.Enum):
    IDLE = "idle"
    WIDGET_LOADING = "widget-loading"
    WIDGET_READY = "widget-ready"
    REDIRECTING = "redirecting"


class CheckoutError(Exception):
    pass


class WidgetAssets:
    """Script and stylesheet of the hosted form, fetched once per browser session.

    ``loader`` receives a URL and returns once the asset is available; a
    failing loader leaves the asset unloaded so a later attempt retries it.
    """

    def __init__(self, loader: Callable[[str], None],
                 script_url: str = WIDGET_SCRIPT_URL, stylesheet_url: str = WIDGET_CSS_URL):
        self.loader = loader
        self.script_url = script_url
        self.stylesheet_url = stylesheet_url
        self.loaded = set()

    def _ensure(self, url: str):
        if url in self.loaded:
            return
        self.loader(url)
        self.loaded.add(url)

    def ensure_loaded(self):
        self._ensure(self.stylesheet_url)
        self._ensure(self.script_url)


def build_status_redirect(status_page_url: str, booking_id: str, payment_id: str, gateway_status: str) -> str:
    query = urlencode({"booking_id": booking_id, "id": payment_id, "status": gateway_status})
    return f"{status_page_url}?{query}"


class CheckoutSession:
    """One checkout attempt for one booking.

    idle -> widget-loading -> widget-ready -> redirecting. The widget is
    initialised at most once per attempt no matter how often ``open`` is
    called; ``close`` tears the attempt down so the next ``open`` starts over.
    """

    def __init__(self, assets: WidgetAssets, init_widget: Callable[[dict], None], *,
                 booking_id: str, amount, publishable_key: str, status_page_url: str,
                 description: str = "دفع حجز"):
        self.assets = assets
        self.init_widget = init_widget
        self.booking_id = booking_id
        self.amount = amount
        self.publishable_key = publishable_key
        self.status_page_url = status_page_url
        self.description = description
        self.state = CheckoutState.IDLE
        self.initialized = False
        self.widget_config: Optional[dict] = None
        self.redirect_url: Optional[str] = None

    def open(self) -> CheckoutState:
        """The checkout surface became visible"""
        if self.initialized or self.state != CheckoutState.IDLE:
            return self.state

        if not self.publishable_key:
            logger.error("MOYASAR_PUBLISHABLE_KEY is not set")
            raise CheckoutError("Payment form is not configured")

        self.state = CheckoutState.WIDGET_LOADING
        try:
            self.assets.ensure_loaded()
        except Exception:
            self.state = CheckoutState.IDLE
            raise

        self.initialized = True
        self.widget_config = build_widget_config(
            amount=self.amount,
            booking_id=self.booking_id,
            publishable_key=self.publishable_key,
            status_page_url=self.status_page_url,
            description=self.description
        )
        self.init_widget(self.widget_config)
        self.state = CheckoutState.WIDGET_READY
        return self.state

    def submitted(self, payment_id: str, gateway_status: str) -> str:
        """The payer submitted the form; returns where the browser goes next"""
        if self.state != CheckoutState.WIDGET_READY:
            raise CheckoutError(f"Cannot submit payment while {self.state.value}")

        self.redirect_url = build_status_redirect(
            self.status_page_url, self.booking_id, payment_id, gateway_status
        )
        self.state = CheckoutState.REDIRECTING
        return self.redirect_url

    def close(self):
        self.initialized = False
        self.widget_config = None
        self.redirect_url = None
        self.state = CheckoutState.IDLE
