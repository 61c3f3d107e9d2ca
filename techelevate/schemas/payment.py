"""Payment Pydantic schemas."""
from pydantic import BaseModel, Field
from typing import Optional


class PaymentIntentRequest(BaseModel):
    """Schema for creating a payment intent."""
    amount: float = Field(..., gt=0, description="Amount in major currency units")
    coupon_code: Optional[str] = None


class PaymentIntentResponse(BaseModel):
    """Schema for payment intent response."""
    client_secret: Optional[str] = None
    amount: float
    discount: float = 0
