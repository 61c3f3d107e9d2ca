"""User Pydantic schemas."""
from pydantic import BaseModel, Field
from datetime import datetime
from uuid import UUID
from typing import Optional


class UserUpsert(BaseModel):
    """Sign-in profile sync. Name and email are checked by the service."""
    name: Optional[str] = None
    email: Optional[str] = None
    photo_url: Optional[str] = Field(None, alias="photoURL")

    model_config = {"populate_by_name": True}


class UserResponse(BaseModel):
    """Schema for user response."""
    id: UUID
    email: str
    name: str
    photo_url: Optional[str] = None
    role: str
    is_subscribed: bool
    subscription_date: Optional[datetime] = None
    created_at: datetime

    class Config:
        from_attributes = True


class UserUpsertResponse(BaseModel):
    """Result of a profile sync."""
    message: str
    outcome: str
    user_id: UUID


class SubscriptionUpdate(BaseModel):
    """
    Schema for a user changing their own subscription.

    Subscribing needs the id of a paid payment intent, or a coupon worth
    the full price.
    """
    is_subscribed: bool
    payment_intent_id: Optional[str] = None
    coupon_code: Optional[str] = None


class AdminSubscriptionUpdate(BaseModel):
    """Schema for an admin granting or revoking a subscription."""
    is_subscribed: bool
    subscription_date: Optional[datetime] = None


class RoleUpdate(BaseModel):
    """Schema for changing a user's role. The role is checked by the service."""
    role: str
