from .booking import HallBookingCreate, ServiceBookingCreate, BookingResponse, CheckoutResponse, WidgetConfig, BookingType, BookingStatus
from .payment import VerifyPaymentRequest, VerifyPaymentResponse, RefundRequest, RefundResponse, SiteAccessRequest, PaymentStatusView, PaymentStatus
from .notification import NotificationResponse, ReviewReminderResult

__all__ = [
    "HallBookingCreate", "ServiceBookingCreate", "BookingResponse", "CheckoutResponse", "WidgetConfig", "BookingType", "BookingStatus",
    "VerifyPaymentRequest", "VerifyPaymentResponse", "RefundRequest", "RefundResponse", "SiteAccessRequest", "PaymentStatusView", "PaymentStatus",
    "NotificationResponse", "ReviewReminderResult"
]
