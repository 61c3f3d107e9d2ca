"""Product reviews."""
import uuid

from sqlalchemy import (
    Column, String, DateTime, Integer, Text, Uuid, ForeignKey, CheckConstraint
)
from sqlalchemy.sql import func
from sqlalchemy.orm import backref, relationship

from techelevate.db import Base


class Review(Base):
    """Review left on a product by a signed-in user."""

    __tablename__ = "reviews"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    product_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    reviewer_email = Column(String, nullable=False, index=True)
    reviewer_name = Column(String, nullable=True)
    reviewer_image = Column(String, nullable=True)
    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)

    product = relationship(
        "Product",
        backref=backref("reviews", cascade="all, delete-orphan", passive_deletes=True)
    )

    __table_args__ = (
        CheckConstraint('rating >= 1 AND rating <= 5', name='ck_review_rating_range'),
    )
