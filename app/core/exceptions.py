"""Failure taxonomy for the payment reconciliation flow.

Every error carries the HTTP status the function boundary answers with and a
short message that is safe to show to the client. Upstream details never go
into ``message``; they are logged where the error is raised.
"""


class PaymentFlowError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class MissingParameters(PaymentFlowError):
    status_code = 400
    message = "Missing required parameters"


class InvalidBookingType(MissingParameters):
    message = "Invalid booking_type"


class ServiceMisconfigured(PaymentFlowError):
    status_code = 500
    message = "Payment service not configured"


class GatewayQueryFailed(PaymentFlowError):
    status_code = 400
    message = "Failed to verify payment with Moyasar"


class RefundRejected(PaymentFlowError):
    status_code = 400
    message = "Failed to process refund"


class BookingNotFound(PaymentFlowError):
    status_code = 404
    message = "Booking not found"


class NothingToRefund(PaymentFlowError):
    status_code = 400
    message = "No paid payment to refund"


class UpdateFailed(PaymentFlowError):
    status_code = 500
    message = "Failed to update booking"
