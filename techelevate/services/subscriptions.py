"""Paid subscriptions."""
import logging
from typing import Optional

from sqlalchemy.orm import Session

from techelevate.models.user import User
from techelevate.services.coupons import validate_coupon
from techelevate.services.errors import PaymentRequired
from techelevate.services.payments import PaymentProvider, get_payment_provider
from techelevate.services.users import set_subscription

logger = logging.getLogger(__name__)

FULL_DISCOUNT = 100


async def subscribe(
    db: Session,
    user: User,
    payment_intent_id: Optional[str] = None,
    coupon_code: Optional[str] = None,
    provider: Optional[PaymentProvider] = None,
) -> User:
    """
    Subscribe ``user`` once the payment provider confirms their payment.

    A coupon worth the full price stands in for the payment. Each payment
    intent can pay for one subscription only.

    Raises:
        PaymentRequired: No payment given, payment not completed, or already used
        CouponInvalid: The coupon cannot be redeemed
        PaymentProcessingError: The payment provider failed
    """
    if user.is_subscribed:
        return user

    if coupon_code and validate_coupon(db, coupon_code) >= FULL_DISCOUNT:
        logger.info(f"Subscription for {user.email} paid in full by coupon")
        return set_subscription(db, user.email, True)

    if not payment_intent_id:
        raise PaymentRequired()

    used = db.query(User.id).filter(User.subscription_payment_id == payment_intent_id).first()
    if used is not None:
        raise PaymentRequired("This payment has already been used")

    if provider is None:
        provider = get_payment_provider()

    if not await provider.payment_succeeded(payment_intent_id):
        logger.info(f"Unpaid subscription attempt by {user.email} with {payment_intent_id}")
        raise PaymentRequired("Payment has not been completed")

    return set_subscription(db, user.email, True, payment_id=payment_intent_id)
