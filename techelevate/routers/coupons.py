"""Coupon routes."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from techelevate.db import get_db
from techelevate.schemas.coupon import CouponValidateRequest, CouponValidateResponse
from techelevate.services.coupons import normalize_code, validate_coupon

router = APIRouter(prefix="/coupons", tags=["coupons"])


@router.post("/validate", response_model=CouponValidateResponse)
async def validate(payload: CouponValidateRequest, db: Session = Depends(get_db)):
    """Check a coupon code. Unknown and expired codes get the same answer."""
    discount = validate_coupon(db, payload.code)
    return CouponValidateResponse(code=normalize_code(payload.code), discount=discount)
