from sqlalchemy import Column, Integer, String, DateTime, Text, Float, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.database import Base
from app.models.booking import new_id

class Hall(Base):
    __tablename__ = "halls"

    id = Column(String(36), primary_key=True, default=new_id)
    owner_id = Column(String(36), nullable=False, index=True)
    name_ar = Column(String(255), nullable=False)
    city = Column(String(100))
    price = Column(Float)
    capacity = Column(Integer)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    bookings = relationship("HallBooking", back_populates="hall")
    reviews = relationship("HallReview", back_populates="hall")

class ServiceProvider(Base):
    __tablename__ = "service_providers"

    id = Column(String(36), primary_key=True, default=new_id)
    owner_id = Column(String(36), nullable=False, index=True)
    name_ar = Column(String(255), nullable=False)
    category = Column(String(100))
    city = Column(String(100))
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    bookings = relationship("ServiceBooking", back_populates="provider")
    reviews = relationship("ServiceProviderReview", back_populates="provider")

class HallReview(Base):
    __tablename__ = "hall_reviews"

    id = Column(String(36), primary_key=True, default=new_id)
    hall_id = Column(String(36), ForeignKey("halls.id"), nullable=False)
    user_id = Column(String(36), nullable=False)
    rating = Column(Integer, nullable=False)
    comment = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    hall = relationship("Hall", back_populates="reviews")

class ServiceProviderReview(Base):
    __tablename__ = "service_provider_reviews"

    id = Column(String(36), primary_key=True, default=new_id)
    provider_id = Column(String(36), ForeignKey("service_providers.id"), nullable=False)
    user_id = Column(String(36), nullable=False)
    rating = Column(Integer, nullable=False)
    comment = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    provider = relationship("ServiceProvider", back_populates="reviews")
