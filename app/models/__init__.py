from .booking import HallBooking, ServiceBooking, BookingType, BookingStatus, PaymentStatus, BOOKING_MODELS
from .venue import Hall, ServiceProvider, HallReview, ServiceProviderReview
from .notification import Notification

from sqlalchemy.orm import configure_mappers
configure_mappers()

__all__ = [
    "HallBooking", "ServiceBooking", "BookingType", "BookingStatus", "PaymentStatus", "BOOKING_MODELS",
    "Hall", "ServiceProvider", "HallReview", "ServiceProviderReview",
    "Notification"
]
