import logging
from datetime import date, datetime, time, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from app.models.booking import BookingStatus, HallBooking, ServiceBooking
from app.models.notification import Notification
from app.models.venue import Hall, HallReview, ServiceProvider, ServiceProviderReview
from app.services.notification_service import NotificationService

logger = logging.getLogger(__name__)

SERVICE_REMINDER = "review_reminder"
HALL_REMINDER = "hall_review_reminder"


class ReminderService:
    """Nudge users to review a hall or provider the day after their booking."""

    @staticmethod
    def _already_reminded(db: Session, user_id: str, reference_type: str, booking_id: str) -> bool:
        return db.query(Notification.id).filter(
            Notification.user_id == user_id,
            Notification.reference_type == reference_type,
            Notification.reference_id == booking_id
        ).first() is not None

    @staticmethod
    def service_reminders(db: Session, day: date) -> list:
        start = datetime.combine(day, time.min)
        end = datetime.combine(day, time.max)
        bookings = db.query(ServiceBooking).filter(
            ServiceBooking.status == BookingStatus.COMPLETED,
            ServiceBooking.updated_at >= start,
            ServiceBooking.updated_at <= end
        ).all()
        logger.info("Found %d completed service bookings for %s", len(bookings), day)

        notifications = []
        for booking in bookings:
            reviewed = db.query(ServiceProviderReview.id).filter(
                ServiceProviderReview.user_id == booking.user_id,
                ServiceProviderReview.provider_id == booking.provider_id
            ).first()
            if reviewed or ReminderService._already_reminded(db, booking.user_id, SERVICE_REMINDER, booking.id):
                continue

            provider: Optional[ServiceProvider] = booking.provider
            provider_name = provider.name_ar if provider and provider.name_ar else "مقدم الخدمة"
            notifications.append(NotificationService.build(
                booking.user_id,
                "شاركنا رأيك! ⭐",
                f"كيف كانت تجربتك مع {provider_name}؟ قيّم الخدمة لمساعدة الآخرين",
                reference_type=SERVICE_REMINDER,
                reference_id=booking.id
            ))
        return notifications

    @staticmethod
    def hall_reminders(db: Session, day: date) -> list:
        bookings = db.query(HallBooking).filter(
            HallBooking.status == BookingStatus.ACCEPTED,
            HallBooking.booking_date == day
        ).all()
        logger.info("Found %d accepted hall bookings for %s", len(bookings), day)

        notifications = []
        for booking in bookings:
            reviewed = db.query(HallReview.id).filter(
                HallReview.user_id == booking.user_id,
                HallReview.hall_id == booking.hall_id
            ).first()
            if reviewed or ReminderService._already_reminded(db, booking.user_id, HALL_REMINDER, booking.id):
                continue

            hall: Optional[Hall] = booking.hall
            hall_name = hall.name_ar if hall and hall.name_ar else "القاعة"
            notifications.append(NotificationService.build(
                booking.user_id,
                "كيف كانت تجربتك؟ ⭐",
                f"شاركنا رأيك في {hall_name} لمساعدة العرسان الآخرين",
                reference_type=HALL_REMINDER,
                reference_id=booking.id
            ))
        return notifications

    @staticmethod
    def send_review_reminders(db: Session, today: Optional[date] = None) -> dict:
        yesterday = (today or date.today()) - timedelta(days=1)

        service_notifications = ReminderService.service_reminders(db, yesterday)
        hall_notifications = ReminderService.hall_reminders(db, yesterday)

        pending = service_notifications + hall_notifications
        if pending:
            try:
                db.add_all(pending)
                db.commit()
            except Exception:
                db.rollback()
                raise
            logger.info("Inserted %d review reminders", len(pending))

        return {
            "success": True,
            "serviceReminders": len(service_notifications),
            "hallReminders": len(hall_notifications)
        }
