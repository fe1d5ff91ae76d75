from .bookings import router as bookings_router
from .notifications import router as notifications_router
from .functions import router as functions_router
from .payment_status import router as payment_status_router

__all__ = [
    "bookings_router",
    "notifications_router",
    "functions_router",
    "payment_status_router"
]
