from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from datetime import date, datetime

from app.models.booking import BookingStatus, BookingType, PaymentStatus

class HallBookingCreate(BaseModel):
    hall_id: str
    booking_date: date
    guest_count_men: Optional[int] = Field(None, ge=0)
    guest_count_women: Optional[int] = Field(None, ge=0)
    notes: Optional[str] = None

class ServiceBookingCreate(BaseModel):
    provider_id: str
    booking_date: date
    total_price: float = Field(..., gt=0)
    package_id: Optional[str] = None
    notes: Optional[str] = None

class BookingResponse(BaseModel):
    id: str
    booking_type: BookingType
    resource_id: str
    user_id: str
    booking_date: date
    status: BookingStatus
    total_price: Optional[float] = None
    amount: Optional[int] = None
    payment_status: PaymentStatus
    payment_id: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

class WidgetConfig(BaseModel):
    element: str
    amount: int
    currency: str
    description: str
    publishable_api_key: str
    callback_url: str
    methods: List[str]
    fixed_width: bool = False

class CheckoutResponse(BaseModel):
    booking: BookingResponse
    widget: WidgetConfig
    script_url: str
    stylesheet_url: str
