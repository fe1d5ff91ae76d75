from .booking_service import BookingService
from .notification_service import NotificationService
from .payment_service import PaymentService
from .reminder_service import ReminderService

__all__ = [
    "BookingService",
    "NotificationService",
    "PaymentService",
    "ReminderService"
]
