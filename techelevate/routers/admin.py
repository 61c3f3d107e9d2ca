"""Admin routes: user roles and site statistics."""
from uuid import UUID
from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlalchemy.orm import Session

from techelevate.db import get_db
from techelevate.dependencies import require_admin
from techelevate.models.review import Review
from techelevate.models.user import User
from techelevate.schemas.admin import AdminStats
from techelevate.schemas.user import AdminSubscriptionUpdate, RoleUpdate, UserResponse
from techelevate.services.products import count_by_status
from techelevate.services.users import get_user, list_users, set_role, set_subscription

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/users", response_model=list[UserResponse])
async def get_users(db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    return list_users(db)


@router.patch("/users/{user_id}/role", response_model=UserResponse)
async def change_role(
    user_id: UUID,
    payload: RoleUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin)
):
    """Make a user a moderator or admin, or demote them."""
    return set_role(db, user_id, payload.role)


@router.patch("/users/{user_id}/subscription", response_model=UserResponse)
async def change_subscription(
    user_id: UUID,
    payload: AdminSubscriptionUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin)
):
    """Grant or revoke a subscription without a payment."""
    user = get_user(db, user_id)
    return set_subscription(
        db,
        email=user.email,
        is_subscribed=payload.is_subscribed,
        subscription_date=payload.subscription_date,
    )


@router.get("/stats", response_model=AdminStats)
async def get_stats(db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    """Counts for the admin statistics page."""
    by_status = count_by_status(db)
    return AdminStats(
        products_by_status=by_status,
        total_products=sum(by_status.values()),
        total_users=db.query(func.count(User.id)).scalar() or 0,
        total_reviews=db.query(func.count(Review.id)).scalar() or 0,
    )
