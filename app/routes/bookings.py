from fastapi import APIRouter, Depends, status as http_status
from sqlalchemy.orm import Session
from typing import List

from app.core.config import Settings, get_settings
from app.core.dependencies import CurrentUser, get_current_user
from app.database import get_db
from app.models.booking import BookingType
from app.schemas.booking import BookingResponse, CheckoutResponse, HallBookingCreate, ServiceBookingCreate
from app.services.booking_service import BookingService

router = APIRouter()

@router.get("/", response_model=List[BookingResponse])
def get_bookings(
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Hall and service bookings of the current user"""
    refs = BookingService.get_user_bookings(db, current_user.id)
    return [BookingService.to_response(ref) for ref in refs]

@router.post("/halls", response_model=CheckoutResponse, status_code=http_status.HTTP_201_CREATED)
def create_hall_booking(
    booking_data: HallBookingCreate,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
    config: Settings = Depends(get_settings)
):
    """Book a hall and get the payment form parameters"""
    ref = BookingService.create_hall_booking(db, booking_data, current_user.id)
    return BookingService.checkout(ref, config)

@router.post("/services", response_model=CheckoutResponse, status_code=http_status.HTTP_201_CREATED)
def create_service_booking(
    booking_data: ServiceBookingCreate,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
    config: Settings = Depends(get_settings)
):
    """Book a service provider and get the payment form parameters"""
    ref = BookingService.create_service_booking(db, booking_data, current_user.id)
    return BookingService.checkout(ref, config)

@router.get("/{booking_type}/{booking_id}", response_model=BookingResponse)
def get_booking(
    booking_type: BookingType,
    booking_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    ref = BookingService.get_booking(db, booking_id, booking_type, current_user.id)
    return BookingService.to_response(ref)
