from pydantic import BaseModel
from typing import Optional

from app.models.booking import PaymentStatus

class VerifyPaymentRequest(BaseModel):
    payment_id: Optional[str] = None
    booking_id: Optional[str] = None
    booking_type: Optional[str] = None

class VerifyPaymentResponse(BaseModel):
    verified: bool
    payment_id: Optional[str] = None
    error: Optional[str] = None

class RefundRequest(BaseModel):
    booking_id: Optional[str] = None
    booking_type: Optional[str] = None

class RefundResponse(BaseModel):
    success: bool
    refund_id: Optional[str] = None
    error: Optional[str] = None

class SiteAccessRequest(BaseModel):
    password: Optional[str] = None

class PaymentStatusView(BaseModel):
    state: str
    message: Optional[str] = None
    payment_id: Optional[str] = None
    booking_id: Optional[str] = None
