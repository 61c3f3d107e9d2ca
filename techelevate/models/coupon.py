"""Discount coupons."""
import uuid

from sqlalchemy import Column, String, DateTime, Float, Text, CheckConstraint, Uuid
from sqlalchemy.sql import func

from techelevate.db import Base


class Coupon(Base):
    """Percentage discount coupon, valid until its expiry date."""

    __tablename__ = "coupons"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    code = Column(String, unique=True, nullable=False, index=True)
    discount = Column(Float, nullable=False)
    description = Column(Text, nullable=True)
    expiry_date = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        CheckConstraint('discount >= 0 AND discount <= 100', name='ck_coupon_discount_range'),
    )
