import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from app.models.notification import Notification

logger = logging.getLogger(__name__)


class NotificationService:

    @staticmethod
    def build(user_id: str, title: str, message: str, reference_type: Optional[str] = None,
              reference_id: Optional[str] = None, type: str = "info") -> Notification:
        return Notification(
            user_id=user_id,
            title=title,
            message=message,
            type=type,
            reference_type=reference_type,
            reference_id=reference_id
        )

    @staticmethod
    def notify(db: Session, user_id: Optional[str], title: str, message: str, **kwargs) -> Optional[Notification]:
        """Store a notification; failures are logged and never break the caller's flow"""
        if not user_id:
            return None
        notification = NotificationService.build(user_id, title, message, **kwargs)
        try:
            db.add(notification)
            db.commit()
        except Exception as e:
            db.rollback()
            logger.warning("Failed to store notification for %s: %s", user_id, e)
            return None
        return notification

    @staticmethod
    def notify_new_booking(db: Session, booking, venue_name: Optional[str]):
        description = f"تم استلام طلب حجز جديد لـ {venue_name}" if venue_name else "تم استلام طلب حجز جديد"
        return NotificationService.notify(
            db, booking.owner_id, "🔔 طلب حجز جديد", description,
            reference_type="booking", reference_id=booking.id
        )

    @staticmethod
    def notify_booking_paid(db: Session, booking):
        return NotificationService.notify(
            db, booking.owner_id, "تم دفع الحجز", "تم تأكيد دفع حجز جديد",
            reference_type="booking_payment", reference_id=booking.id, type="success"
        )

    @staticmethod
    def notify_refund(db: Session, booking):
        return NotificationService.notify(
            db, booking.user_id, "تم استرداد المبلغ", "تم استرداد مبلغ حجزك",
            reference_type="booking_refund", reference_id=booking.id
        )

    @staticmethod
    def get_user_notifications(db: Session, user_id: str, unread_only: bool = False) -> List[Notification]:
        query = db.query(Notification).filter(Notification.user_id == user_id)
        if unread_only:
            query = query.filter(Notification.is_read == False)  # noqa: E712
        return query.order_by(Notification.created_at.desc()).all()

    @staticmethod
    def mark_read(db: Session, notification_id: str, user_id: str) -> Optional[Notification]:
        notification = db.query(Notification).filter(
            Notification.id == notification_id,
            Notification.user_id == user_id
        ).first()
        if not notification:
            return None
        notification.is_read = True
        db.commit()
        db.refresh(notification)
        return notification
