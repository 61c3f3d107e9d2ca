"""Coupon Pydantic schemas."""
from pydantic import BaseModel


class CouponValidateRequest(BaseModel):
    """Schema for validating a coupon code."""
    code: str = ""


class CouponValidateResponse(BaseModel):
    """Schema for a redeemable coupon."""
    valid: bool = True
    code: str
    discount: float
