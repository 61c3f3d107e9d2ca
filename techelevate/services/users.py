"""User profile sync, subscriptions and roles."""
import logging
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy.orm import Session

from techelevate.models.user import User, UserRole
from techelevate.services.errors import UserNotFound, ValidationError

logger = logging.getLogger(__name__)


class UpsertOutcome(str, Enum):
    """What ``upsert_user`` did."""
    CREATED = "created"
    UPDATED = "updated"
    UNCHANGED = "unchanged"


def _parse_role(role: str) -> UserRole:
    try:
        return UserRole(role)
    except ValueError:
        allowed = ", ".join(r.value for r in UserRole)
        raise ValidationError(f"Invalid role '{role}'. Allowed roles: {allowed}")


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()


def get_user(db: Session, user_id: UUID) -> User:
    """
    Get a user by id.

    Raises:
        UserNotFound: No user with this id
    """
    user = db.get(User, user_id)
    if user is None:
        raise UserNotFound()
    return user


def list_users(db: Session) -> List[User]:
    return db.query(User).order_by(User.created_at.desc()).all()


def upsert_user(
    db: Session,
    name: Optional[str],
    email: Optional[str],
    photo_url: Optional[str] = None,
    role: Optional[str] = None,
    is_subscribed: Optional[bool] = None,
    subscription_date: Optional[datetime] = None,
) -> Tuple[User, UpsertOutcome]:
    """
    Create a user on first sign-in or sync the profile of an existing one.

    For an existing user only ``name`` and ``photo_url`` are updated, and only
    with non-empty values. Role and subscription fields are never changed by
    this path; they apply to newly created users only.

    Returns:
        Tuple of (user, outcome)

    Raises:
        ValidationError: If name or email is missing, or role is unknown
    """
    if not name or not name.strip() or not email or not email.strip():
        raise ValidationError("Name and Email are required.")

    existing = get_user_by_email(db, email)

    if existing:
        new_name = name or existing.name
        new_photo = photo_url or existing.photo_url

        if new_name == existing.name and new_photo == existing.photo_url:
            logger.debug(f"No profile changes for {email}")
            return existing, UpsertOutcome.UNCHANGED

        existing.name = new_name
        existing.photo_url = new_photo
        db.commit()
        db.refresh(existing)
        logger.info(f"Profile updated for {email}")
        return existing, UpsertOutcome.UPDATED

    user = User(
        name=name,
        email=email,
        photo_url=photo_url,
        role=_parse_role(role).value if role else UserRole.USER.value,
        is_subscribed=bool(is_subscribed),
        subscription_date=subscription_date,
    )
    db.add(user)
    db.commit()
    db.refresh(user)

    logger.info(f"User registered: {email}")
    return user, UpsertOutcome.CREATED


def set_subscription(
    db: Session,
    email: str,
    is_subscribed: bool,
    subscription_date: Optional[datetime] = None,
    payment_id: Optional[str] = None,
) -> User:
    """
    Set a user's subscription state.

    Subscribing without a date stamps the current time; unsubscribing clears
    the date. Re-applying the current state keeps the existing date.
    ``payment_id`` records the payment that bought the subscription.

    Raises:
        UserNotFound: No user with this email
    """
    user = get_user_by_email(db, email)
    if user is None:
        raise UserNotFound()

    if is_subscribed:
        if subscription_date is not None:
            user.subscription_date = subscription_date
        elif not user.is_subscribed or user.subscription_date is None:
            user.subscription_date = datetime.now(timezone.utc)
    else:
        user.subscription_date = None
    user.is_subscribed = is_subscribed
    if payment_id is not None:
        user.subscription_payment_id = payment_id

    db.commit()
    db.refresh(user)

    logger.info(f"Subscription for {email} set to {is_subscribed}")
    return user


def set_role(db: Session, user_id: UUID, role: str) -> User:
    """
    Change a user's role.

    Raises:
        ValidationError: If role is not user, moderator or admin
        UserNotFound: No user with this id
    """
    parsed = _parse_role(role)
    user = get_user(db, user_id)

    if user.role != parsed.value:
        logger.info(f"Role for {user.email} changed: {user.role} -> {parsed.value}")
        user.role = parsed.value
        db.commit()
        db.refresh(user)

    return user
