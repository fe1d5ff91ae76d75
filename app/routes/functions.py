import logging
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.core.config import Settings, get_settings
from app.core.cors import function_response, preflight_response
from app.core.dependencies import get_gateway
from app.core.exceptions import PaymentFlowError
from app.database import get_db
from app.schemas.notification import ReviewReminderResult
from app.schemas.payment import (
    RefundRequest,
    RefundResponse,
    SiteAccessRequest,
    VerifyPaymentRequest,
    VerifyPaymentResponse,
)
from app.services.moyasar import MoyasarClient
from app.services.payment_service import PaymentService
from app.services.reminder_service import ReminderService
from app.services.site_access import SiteAccessNotConfigured, verify_site_password

router = APIRouter()
logger = logging.getLogger(__name__)

FUNCTION_PATHS = ["/verify-payment", "/process-refund", "/send-review-reminders", "/verify-site-access"]


def _options():
    return preflight_response()


for _path in FUNCTION_PATHS:
    router.add_api_route(_path, _options, methods=["OPTIONS"], include_in_schema=False)


def _answer(body: BaseModel, status_code: int = 200):
    return function_response(body.model_dump(exclude_none=True), status_code)


@router.post("/verify-payment", response_model=VerifyPaymentResponse)
def verify_payment(
    payload: VerifyPaymentRequest,
    db: Session = Depends(get_db),
    gateway: Optional[MoyasarClient] = Depends(get_gateway)
):
    """Check a charge with Moyasar and mark its booking paid"""
    try:
        result = PaymentService.verify_payment(
            db, gateway, payload.payment_id, payload.booking_id, payload.booking_type
        )
    except PaymentFlowError as e:
        return _answer(VerifyPaymentResponse(verified=False, error=e.message), e.status_code)
    except Exception:
        logger.exception("Verify payment error")
        return _answer(VerifyPaymentResponse(verified=False, error="Internal server error"), 500)

    if not result.verified:
        return _answer(VerifyPaymentResponse(verified=False, error=result.error))
    return _answer(VerifyPaymentResponse(verified=True, payment_id=result.payment_id))


@router.post("/process-refund", response_model=RefundResponse)
def process_refund(
    payload: RefundRequest,
    db: Session = Depends(get_db),
    gateway: Optional[MoyasarClient] = Depends(get_gateway)
):
    """Refund the paid charge of a booking"""
    try:
        result = PaymentService.process_refund(db, gateway, payload.booking_id, payload.booking_type)
    except PaymentFlowError as e:
        return _answer(RefundResponse(success=False, error=e.message), e.status_code)
    except Exception:
        logger.exception("Refund error")
        return _answer(RefundResponse(success=False, error="Internal server error"), 500)

    return _answer(RefundResponse(success=True, refund_id=result.refund_id))


@router.post("/send-review-reminders", response_model=ReviewReminderResult)
def send_review_reminders(db: Session = Depends(get_db)):
    try:
        result = ReminderService.send_review_reminders(db)
    except Exception:
        logger.exception("Error in send-review-reminders")
        return function_response({"error": "Internal server error"}, 500)
    return _answer(ReviewReminderResult(**result))


@router.post("/verify-site-access")
def verify_site_access(payload: SiteAccessRequest, config: Settings = Depends(get_settings)):
    try:
        granted = verify_site_password(payload.password, config.SITE_ACCESS_PASSWORD)
    except SiteAccessNotConfigured:
        return function_response({"success": False, "error": "Password not configured"}, 500)

    if granted:
        return function_response({"success": True})
    return function_response({"success": False, "error": "Invalid password"}, 401)
