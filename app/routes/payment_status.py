from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.checkout.status_page import PaymentStatusPage
from app.core.dependencies import get_gateway
from app.database import get_db
from app.schemas.payment import PaymentStatusView
from app.services.moyasar import MoyasarClient
from app.services.payment_service import PaymentService

router = APIRouter()

@router.get("/payment-status", response_model=PaymentStatusView)
def payment_status(
    id: Optional[str] = Query(None),
    booking_id: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    gateway: Optional[MoyasarClient] = Depends(get_gateway)
):
    """Redirect target of the payment form"""

    def verify(payment_id: str, booking: str) -> dict:
        result = PaymentService.verify_payment(db, gateway, payment_id, booking)
        return {"verified": result.verified, "payment_id": result.payment_id, "error": result.error}

    params = {key: value for key, value in (("id", id), ("booking_id", booking_id), ("status", status)) if value}
    page = PaymentStatusPage(params, verify)
    page.load()
    return page.as_dict()
