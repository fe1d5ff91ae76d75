from sqlalchemy import Column, Integer, String, DateTime, Date, Text, Float, ForeignKey, Enum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import enum
import uuid
from app.database import Base

def new_id():
    return str(uuid.uuid4())

class BookingType(str, enum.Enum):
    HALL = "hall"
    SERVICE = "service"

class BookingStatus(str, enum.Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    CANCELLED = "cancelled"
    COMPLETED = "completed"

class PaymentStatus(str, enum.Enum):
    UNPAID = "unpaid"
    PAID = "paid"
    REFUNDED = "refunded"

class HallBooking(Base):
    __tablename__ = "hall_bookings"

    id = Column(String(36), primary_key=True, default=new_id)
    hall_id = Column(String(36), ForeignKey("halls.id"), nullable=False, index=True)
    user_id = Column(String(36), nullable=False, index=True)
    booking_date = Column(Date, nullable=False)
    guest_count_men = Column(Integer)
    guest_count_women = Column(Integer)
    notes = Column(Text)
    status = Column(Enum(BookingStatus), default=BookingStatus.PENDING)
    total_price = Column(Float)  # SAR
    amount = Column(Integer)  # halalas, overwritten by the gateway on payment
    payment_status = Column(Enum(PaymentStatus), nullable=False, default=PaymentStatus.UNPAID)
    payment_id = Column(String(100))
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    hall = relationship("Hall", back_populates="bookings")

    @property
    def owner_id(self):
        return self.hall.owner_id if self.hall else None

class ServiceBooking(Base):
    __tablename__ = "service_bookings"

    id = Column(String(36), primary_key=True, default=new_id)
    provider_id = Column(String(36), ForeignKey("service_providers.id"), nullable=False, index=True)
    package_id = Column(String(36))
    user_id = Column(String(36), nullable=False, index=True)
    booking_date = Column(Date, nullable=False)
    notes = Column(Text)
    status = Column(Enum(BookingStatus), default=BookingStatus.PENDING)
    total_price = Column(Float, nullable=False)
    amount = Column(Integer)
    payment_status = Column(Enum(PaymentStatus), nullable=False, default=PaymentStatus.UNPAID)
    payment_id = Column(String(100))
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    provider = relationship("ServiceProvider", back_populates="bookings")

    @property
    def owner_id(self):
        return self.provider.owner_id if self.provider else None

BOOKING_MODELS = {
    BookingType.HALL: HallBooking,
    BookingType.SERVICE: ServiceBooking,
}
