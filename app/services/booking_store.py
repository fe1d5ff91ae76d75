import logging
from dataclasses import dataclass
from typing import Optional, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import BookingNotFound, InvalidBookingType, UpdateFailed
from app.models.booking import BOOKING_MODELS, BookingType, HallBooking, PaymentStatus, ServiceBooking

logger = logging.getLogger(__name__)


@dataclass
class BookingRef:
    """A booking row tagged with the table it lives in."""

    booking_type: BookingType
    row: Union[HallBooking, ServiceBooking]

    @property
    def id(self) -> str:
        return self.row.id


def parse_booking_type(value) -> BookingType:
    try:
        return BookingType(value)
    except ValueError:
        raise InvalidBookingType()


class BookingStore:
    """Reads and payment-field writes for hall and service bookings.

    Only the payment functions call the ``mark_*`` methods; they keep
    ``payment_id`` set exactly when the status is paid or refunded.
    """

    def __init__(self, db: Session):
        self.db = db

    def get(self, booking_id: str, booking_type: BookingType) -> Optional[BookingRef]:
        model = BOOKING_MODELS[booking_type]
        row = self.db.query(model).filter(model.id == booking_id).first()
        if row is None:
            return None
        return BookingRef(booking_type, row)

    def get_or_404(self, booking_id: str, booking_type: BookingType) -> BookingRef:
        try:
            ref = self.get(booking_id, booking_type)
        except SQLAlchemyError:
            logger.exception("Lookup of %s booking %s failed", booking_type.value, booking_id)
            raise BookingNotFound()
        if ref is None:
            raise BookingNotFound()
        return ref

    def locate(self, booking_id: str) -> Optional[BookingRef]:
        """Find a booking whose type is unknown: halls first, then services."""
        for booking_type in (BookingType.HALL, BookingType.SERVICE):
            ref = self.get(booking_id, booking_type)
            if ref is not None:
                return ref
        return None

    def mark_paid(self, ref: BookingRef, payment_id: str, amount: int) -> bool:
        """Record a verified charge. Returns False when the row is already refunded.

        The refunded check runs inside the UPDATE itself, so a refund committed
        after ``ref`` was loaded still wins.
        """
        model = BOOKING_MODELS[ref.booking_type]
        try:
            updated = (
                self.db.query(model)
                .filter(model.id == ref.id, model.payment_status != PaymentStatus.REFUNDED)
                .update(
                    {
                        model.payment_status: PaymentStatus.PAID,
                        model.payment_id: payment_id,
                        model.amount: amount
                    },
                    synchronize_session=False
                )
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Error marking %s booking %s as paid: %s", ref.booking_type.value, ref.id, e)
            raise UpdateFailed() from e

        self._commit(ref, "paid")
        return updated > 0

    def mark_refunded(self, ref: BookingRef) -> BookingRef:
        ref.row.payment_status = PaymentStatus.REFUNDED
        self._commit(ref, "refunded")
        return ref

    def _commit(self, ref: BookingRef, state: str):
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Error marking %s booking %s as %s: %s", ref.booking_type.value, ref.id, state, e)
            raise UpdateFailed() from e
        self.db.refresh(ref.row)
