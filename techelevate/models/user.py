"""User accounts and subscription state."""
from enum import Enum
import uuid

from sqlalchemy import Column, String, Boolean, DateTime, CheckConstraint, Uuid
from sqlalchemy.sql import func

from techelevate.db import Base


class UserRole(str, Enum):
    """Roles a user can hold."""
    USER = "user"
    MODERATOR = "moderator"
    ADMIN = "admin"


class User(Base):
    """User account, created on first sign-in."""

    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String, unique=True, nullable=False, index=True)
    name = Column(String, nullable=False)
    photo_url = Column(String, nullable=True)
    role = Column(String, nullable=False, default=UserRole.USER.value)
    is_subscribed = Column(Boolean, nullable=False, default=False)
    subscription_date = Column(DateTime(timezone=True), nullable=True)
    subscription_payment_id = Column(String, unique=True, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        CheckConstraint("role IN ('user', 'moderator', 'admin')", name='ck_user_role'),
    )

    @property
    def is_moderator(self) -> bool:
        """Moderators and admins may moderate products."""
        return self.role in (UserRole.MODERATOR.value, UserRole.ADMIN.value)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value
