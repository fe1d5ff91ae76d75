from sqlalchemy.orm import Session
from fastapi import HTTPException, status
from typing import List

from app.core.config import Settings
from app.models.booking import HallBooking, ServiceBooking, BookingType, BookingStatus, PaymentStatus
from app.models.venue import Hall, ServiceProvider
from app.schemas.booking import HallBookingCreate, ServiceBookingCreate
from app.services.booking_store import BookingRef, BookingStore
from app.services.moyasar import WIDGET_CSS_URL, WIDGET_SCRIPT_URL, build_widget_config, to_halalas
from app.services.notification_service import NotificationService
from app.utils.validators import sanitize_input

class BookingService:

    @staticmethod
    def to_response(ref: BookingRef) -> dict:
        row = ref.row
        resource_id = row.hall_id if ref.booking_type == BookingType.HALL else row.provider_id
        return {
            "id": row.id,
            "booking_type": ref.booking_type.value,
            "resource_id": resource_id,
            "user_id": row.user_id,
            "booking_date": row.booking_date,
            "status": row.status.value if row.status else BookingStatus.PENDING.value,
            "total_price": row.total_price,
            "amount": row.amount,
            "payment_status": row.payment_status.value,
            "payment_id": row.payment_id,
            "notes": row.notes,
            "created_at": row.created_at
        }

    @staticmethod
    def checkout(ref: BookingRef, config: Settings) -> dict:
        """Booking plus everything the client needs to open the payment form"""
        widget = build_widget_config(
            amount=ref.row.total_price,
            booking_id=ref.id,
            publishable_key=config.MOYASAR_PUBLISHABLE_KEY,
            status_page_url=config.PAYMENT_STATUS_URL
        )
        return {
            "booking": BookingService.to_response(ref),
            "widget": widget,
            "script_url": WIDGET_SCRIPT_URL,
            "stylesheet_url": WIDGET_CSS_URL
        }

    @staticmethod
    def _save(db: Session, booking, venue_name: str) -> None:
        try:
            db.add(booking)
            db.commit()
            db.refresh(booking)
        except Exception as e:
            db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Error creating booking: {str(e)}"
            )

        NotificationService.notify_new_booking(db, booking, venue_name)

    @staticmethod
    def create_hall_booking(db: Session, booking_data: HallBookingCreate, user_id: str) -> BookingRef:
        hall = db.query(Hall).filter(Hall.id == booking_data.hall_id).first()
        if not hall:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Hall not found")
        if not hall.price:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Hall has no price set")

        booking = HallBooking(
            hall_id=hall.id,
            user_id=user_id,
            booking_date=booking_data.booking_date,
            guest_count_men=booking_data.guest_count_men,
            guest_count_women=booking_data.guest_count_women,
            notes=sanitize_input(booking_data.notes),
            status=BookingStatus.PENDING,
            total_price=hall.price,
            amount=to_halalas(hall.price),
            payment_status=PaymentStatus.UNPAID
        )
        BookingService._save(db, booking, hall.name_ar)
        return BookingRef(BookingType.HALL, booking)

    @staticmethod
    def create_service_booking(db: Session, booking_data: ServiceBookingCreate, user_id: str) -> BookingRef:
        provider = db.query(ServiceProvider).filter(ServiceProvider.id == booking_data.provider_id).first()
        if not provider:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Service provider not found")

        booking = ServiceBooking(
            provider_id=provider.id,
            package_id=booking_data.package_id,
            user_id=user_id,
            booking_date=booking_data.booking_date,
            notes=sanitize_input(booking_data.notes),
            status=BookingStatus.PENDING,
            total_price=booking_data.total_price,
            amount=to_halalas(booking_data.total_price),
            payment_status=PaymentStatus.UNPAID
        )
        BookingService._save(db, booking, provider.name_ar)
        return BookingRef(BookingType.SERVICE, booking)

    @staticmethod
    def get_booking(db: Session, booking_id: str, booking_type: BookingType, user_id: str) -> BookingRef:
        ref = BookingStore(db).get(booking_id, booking_type)
        if not ref:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found")
        if user_id not in (ref.row.user_id, ref.row.owner_id):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized to view this booking")
        return ref

    @staticmethod
    def get_user_bookings(db: Session, user_id: str) -> List[BookingRef]:
        halls = db.query(HallBooking).filter(HallBooking.user_id == user_id).all()
        services = db.query(ServiceBooking).filter(ServiceBooking.user_id == user_id).all()
        refs = [BookingRef(BookingType.HALL, row) for row in halls]
        refs += [BookingRef(BookingType.SERVICE, row) for row in services]
        return sorted(refs, key=lambda ref: ref.row.booking_date, reverse=True)
