"""User routes: sign-in sync, lookup and subscription."""
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from techelevate.db import get_db
from techelevate.dependencies import require_user
from techelevate.models.user import User
from techelevate.schemas.user import (
    SubscriptionUpdate, UserResponse, UserUpsert, UserUpsertResponse
)
from techelevate.services.errors import UserNotFound, ValidationError
from techelevate.services.subscriptions import subscribe
from techelevate.services.users import (
    UpsertOutcome, get_user_by_email, set_subscription, upsert_user
)

router = APIRouter(prefix="/users", tags=["users"])

_UPSERT_MESSAGES = {
    UpsertOutcome.CREATED: "User registered successfully.",
    UpsertOutcome.UPDATED: "User data updated successfully.",
    UpsertOutcome.UNCHANGED: "No changes made to the user data.",
}


@router.post("", response_model=UserUpsertResponse)
async def sync_user(
    payload: UserUpsert,
    response: Response,
    db: Session = Depends(get_db)
):
    """Create the user on first sign-in, otherwise sync name and photo."""
    user, outcome = upsert_user(
        db,
        name=payload.name,
        email=payload.email,
        photo_url=payload.photo_url,
    )
    if outcome == UpsertOutcome.CREATED:
        response.status_code = status.HTTP_201_CREATED

    return UserUpsertResponse(
        message=_UPSERT_MESSAGES[outcome],
        outcome=outcome.value,
        user_id=user.id
    )


@router.get("", response_model=UserResponse)
async def get_user(email: str = "", db: Session = Depends(get_db)):
    """Fetch a user by email."""
    if not email:
        raise ValidationError("Email is required")

    user = get_user_by_email(db, email)
    if user is None:
        raise UserNotFound()
    return user


@router.get("/me", response_model=UserResponse)
async def get_me(user: User = Depends(require_user)):
    """Get the signed-in user."""
    return user


@router.patch("/me/subscription", response_model=UserResponse)
async def update_my_subscription(
    payload: SubscriptionUpdate,
    user: User = Depends(require_user),
    db: Session = Depends(get_db)
):
    """Subscribe after a completed checkout, or cancel the subscription."""
    if not payload.is_subscribed:
        return set_subscription(db, email=user.email, is_subscribed=False)

    return await subscribe(
        db,
        user,
        payment_intent_id=payload.payment_intent_id,
        coupon_code=payload.coupon_code,
    )
