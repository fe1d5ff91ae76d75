from datetime import date, datetime

from app.models import (
    BookingStatus,
    HallBooking,
    HallReview,
    Notification,
    ServiceBooking,
    ServiceProviderReview,
)
from app.services.reminder_service import HALL_REMINDER, SERVICE_REMINDER, ReminderService

TODAY = date(2026, 10, 19)
YESTERDAY = date(2026, 10, 18)


def add_service_booking(db, booking_id, user_id, status=BookingStatus.COMPLETED, updated=datetime(2026, 10, 18, 15, 30)):
    booking = ServiceBooking(
        id=booking_id,
        provider_id="sp1",
        user_id=user_id,
        booking_date=YESTERDAY,
        total_price=900.0,
        status=status,
        updated_at=updated,
    )
    db.add(booking)
    db.commit()
    return booking


def add_hall_booking(db, booking_id, user_id, booking_date=YESTERDAY, status=BookingStatus.ACCEPTED):
    booking = HallBooking(
        id=booking_id,
        hall_id="h1",
        user_id=user_id,
        booking_date=booking_date,
        total_price=5000.0,
        status=status,
    )
    db.add(booking)
    db.commit()
    return booking


def test_reminds_completed_service_bookings(db, provider):
    add_service_booking(db, "s-done", "user-a")
    add_service_booking(db, "s-pending", "user-b", status=BookingStatus.PENDING)
    add_service_booking(db, "s-old", "user-c", updated=datetime(2026, 10, 10, 9, 0))

    result = ReminderService.send_review_reminders(db, today=TODAY)

    assert result == {"success": True, "serviceReminders": 1, "hallReminders": 0}
    notification = db.query(Notification).one()
    assert notification.user_id == "user-a"
    assert notification.reference_type == SERVICE_REMINDER
    assert "استوديو النور" in notification.message


def test_reminds_accepted_hall_bookings_from_yesterday(db, hall):
    add_hall_booking(db, "h-yes", "user-a")
    add_hall_booking(db, "h-rejected", "user-b", status=BookingStatus.REJECTED)
    add_hall_booking(db, "h-future", "user-c", booking_date=date(2026, 11, 1))

    result = ReminderService.send_review_reminders(db, today=TODAY)

    assert result["hallReminders"] == 1
    notification = db.query(Notification).one()
    assert notification.reference_type == HALL_REMINDER
    assert notification.reference_id == "h-yes"


def test_skips_users_who_already_reviewed(db, hall, provider):
    add_hall_booking(db, "h-yes", "user-a")
    add_service_booking(db, "s-done", "user-b")
    db.add(HallReview(hall_id="h1", user_id="user-a", rating=5))
    db.add(ServiceProviderReview(provider_id="sp1", user_id="user-b", rating=4))
    db.commit()

    result = ReminderService.send_review_reminders(db, today=TODAY)

    assert result == {"success": True, "serviceReminders": 0, "hallReminders": 0}


def test_does_not_remind_twice(db, hall):
    add_hall_booking(db, "h-yes", "user-a")

    ReminderService.send_review_reminders(db, today=TODAY)
    second = ReminderService.send_review_reminders(db, today=TODAY)

    assert second["hallReminders"] == 0
    assert db.query(Notification).count() == 1


def test_reminder_function_endpoint(client, db, hall):
    response = client.post("/functions/v1/send-review-reminders")

    assert response.status_code == 200
    assert response.json() == {"success": True, "serviceReminders": 0, "hallReminders": 0}
    assert response.headers["access-control-allow-origin"] == "*"
