"""Payment routes."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from techelevate.db import get_db
from techelevate.dependencies import require_principal
from techelevate.schemas.payment import PaymentIntentRequest, PaymentIntentResponse
from techelevate.services.coupons import validate_coupon
from techelevate.services.payments import apply_discount, create_payment_intent

router = APIRouter(prefix="/payments", tags=["payments"])


@router.post("/create-intent", response_model=PaymentIntentResponse)
async def create_intent(
    payload: PaymentIntentRequest,
    db: Session = Depends(get_db),
    principal: str = Depends(require_principal)
):
    """Create a payment intent for a subscription, optionally with a coupon."""
    discount = 0.0
    if payload.coupon_code:
        discount = validate_coupon(db, payload.coupon_code)

    amount = apply_discount(payload.amount, discount)
    if amount == 0:
        # Nothing to charge; subscribe with the coupon instead of a payment
        return PaymentIntentResponse(client_secret=None, amount=0, discount=discount)

    client_secret = await create_payment_intent(amount)

    return PaymentIntentResponse(client_secret=client_secret, amount=amount, discount=discount)
