import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import (
    GatewayQueryFailed,
    MissingParameters,
    NothingToRefund,
    RefundRejected,
    ServiceMisconfigured,
    UpdateFailed,
)
from app.models.booking import PaymentStatus
from app.services.booking_store import BookingStore, parse_booking_type
from app.services.moyasar import GatewayError, MoyasarClient
from app.services.notification_service import NotificationService

logger = logging.getLogger(__name__)

PAID = "paid"


@dataclass
class VerificationResult:
    verified: bool
    payment_id: Optional[str] = None
    status: Optional[str] = None
    error: Optional[str] = None


@dataclass
class RefundResult:
    refund_id: Optional[str]
    booking_id: str


def _require_gateway(gateway: Optional[MoyasarClient]) -> MoyasarClient:
    if gateway is None:
        logger.error("MOYASAR_SECRET_KEY not configured")
        raise ServiceMisconfigured()
    return gateway


class PaymentService:

    @staticmethod
    def verify_payment(db: Session, gateway: Optional[MoyasarClient], payment_id: Optional[str],
                       booking_id: Optional[str], booking_type: Optional[str] = None) -> VerificationResult:
        """Reconcile a gateway charge into the booking it pays for.

        A charge that is not ``paid`` is an ordinary outcome and yields
        ``verified=False`` without touching the store. For a paid charge the
        gateway's amount replaces whatever the booking held.
        """
        if not payment_id or not booking_id:
            raise MissingParameters("Missing payment_id or booking_id")

        gateway = _require_gateway(gateway)

        try:
            payment = gateway.fetch_payment(payment_id)
        except GatewayError as e:
            logger.error("Moyasar API error for payment %s: %s", payment_id, e.body)
            raise GatewayQueryFailed()

        status = payment.get("status")
        if status != PAID:
            return VerificationResult(verified=False, status=status, error=f"Payment status: {status}")

        store = BookingStore(db)
        try:
            if booking_type:
                ref = store.get(booking_id, parse_booking_type(booking_type))
            else:
                ref = store.locate(booking_id)
        except SQLAlchemyError as e:
            logger.error("Error loading booking %s: %s", booking_id, e)
            raise UpdateFailed() from e

        if ref is None:
            logger.error("Paid charge %s references unknown booking %s", payment_id, booking_id)
            raise UpdateFailed()

        newly_paid = ref.row.payment_status == PaymentStatus.UNPAID
        canonical_id = payment.get("id") or payment_id
        if not store.mark_paid(ref, canonical_id, payment.get("amount")):
            logger.warning("Charge %s verified for already refunded booking %s", canonical_id, ref.id)
            return VerificationResult(verified=False, status=PaymentStatus.REFUNDED.value,
                                      error=f"Payment status: {PaymentStatus.REFUNDED.value}")

        logger.info("Booking %s (%s) marked paid by %s", ref.id, ref.booking_type.value, canonical_id)

        if newly_paid:
            NotificationService.notify_booking_paid(db, ref.row)

        return VerificationResult(verified=True, payment_id=canonical_id, status=PAID)

    @staticmethod
    def process_refund(db: Session, gateway: Optional[MoyasarClient], booking_id: Optional[str],
                       booking_type: Optional[str]) -> RefundResult:
        if not booking_id or not booking_type:
            raise MissingParameters("Missing booking_id or booking_type")

        kind = parse_booking_type(booking_type)
        gateway = _require_gateway(gateway)

        store = BookingStore(db)
        ref = store.get_or_404(booking_id, kind)
        booking = ref.row

        if booking.payment_status != PaymentStatus.PAID or not booking.payment_id:
            raise NothingToRefund()

        try:
            refund_id = gateway.refund_payment(booking.payment_id, booking.amount).get("id")
        except GatewayError as e:
            if not e.accepted:
                logger.error("Moyasar refund error for booking %s: %s", booking_id, e.body)
                raise RefundRejected()
            logger.critical(
                "Refund of %s booking %s accepted by the gateway with an unreadable reply, refund id unknown: %s",
                kind.value, booking_id, e.body
            )
            refund_id = None

        try:
            store.mark_refunded(ref)
        except UpdateFailed:
            # money already went back; the row needs manual reconciliation
            logger.critical(
                "Refund %s succeeded at the gateway but %s booking %s is still marked paid",
                refund_id, kind.value, booking_id
            )
        else:
            NotificationService.notify_refund(db, booking)

        return RefundResult(refund_id=refund_id, booking_id=booking_id)
