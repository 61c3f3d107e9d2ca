"""Coupon validation and seeding."""
import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from techelevate.models.coupon import Coupon
from techelevate.services.errors import CouponExpired, CouponNotFound, ValidationError

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; they are stored as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def normalize_code(code: Optional[str]) -> str:
    return (code or "").strip()


def validate_coupon(db: Session, code: Optional[str], now: Optional[datetime] = None) -> float:
    """
    Check that a coupon can be redeemed and return its discount.

    Coupons are not consumed; any number of redemptions is allowed until the
    expiry date.

    Raises:
        CouponNotFound: No coupon with this code
        CouponExpired: The coupon's expiry date has passed
    """
    code = normalize_code(code)
    now = _as_utc(now or datetime.now(timezone.utc))

    coupon = db.query(Coupon).filter(Coupon.code == code).first() if code else None
    if coupon is None:
        logger.info(f"Coupon lookup failed for code {code!r}")
        raise CouponNotFound()

    if now > _as_utc(coupon.expiry_date):
        logger.info(f"Coupon {code!r} expired at {coupon.expiry_date}")
        raise CouponExpired()

    return coupon.discount


def save_coupon(
    db: Session,
    code: str,
    discount: float,
    expiry_date: datetime,
    description: Optional[str] = None,
) -> Coupon:
    """Insert a coupon, or update the one with the same code."""
    code = normalize_code(code)
    if not code:
        raise ValidationError("Coupon code is required")
    if discount < 0 or discount > 100:
        raise ValidationError("Discount must be a percentage between 0 and 100")

    coupon = db.query(Coupon).filter(Coupon.code == code).first()
    if coupon is None:
        coupon = Coupon(code=code)
        db.add(coupon)

    coupon.discount = discount
    coupon.expiry_date = _as_utc(expiry_date)
    coupon.description = description

    db.commit()
    db.refresh(coupon)
    return coupon
