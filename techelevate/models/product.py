"""Product submissions and their community ledgers."""
from enum import Enum
import uuid

from sqlalchemy import (
    Column, String, Boolean, DateTime, Integer, Text, JSON, Uuid,
    ForeignKey, UniqueConstraint, CheckConstraint
)
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from techelevate.db import Base


class ProductStatus(str, Enum):
    """Moderation status of a product."""
    PENDING = "Pending"
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"


class Product(Base):
    """Submitted product."""

    __tablename__ = "products"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    owner_email = Column(String, nullable=False, index=True)
    owner_name = Column(String, nullable=True)
    owner_image = Column(String, nullable=True)

    product_name = Column(String, nullable=False)
    product_image = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    tags = Column(JSON, nullable=False, default=list)
    external_link = Column(String, nullable=True)

    status = Column(String, nullable=False, default=ProductStatus.PENDING.value, index=True)
    is_featured = Column(Boolean, nullable=False, default=False, index=True)
    upvotes = Column(Integer, nullable=False, default=0)
    reports = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)

    # Relationships
    votes = relationship(
        "ProductVote", back_populates="product",
        cascade="all, delete-orphan", passive_deletes=True
    )
    report_entries = relationship(
        "ProductReport", back_populates="product",
        cascade="all, delete-orphan", passive_deletes=True
    )

    __table_args__ = (
        CheckConstraint("status IN ('Pending', 'Accepted', 'Rejected')", name='ck_product_status'),
        CheckConstraint('upvotes >= 0', name='ck_product_upvotes'),
        CheckConstraint('reports >= 0', name='ck_product_reports'),
    )

    @property
    def voters(self) -> list[str]:
        return [vote.voter_email for vote in self.votes]

    @property
    def reported_by(self) -> list[str]:
        return [entry.reporter_email for entry in self.report_entries]


class ProductVote(Base):
    """One upvote per principal per product."""

    __tablename__ = "product_votes"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    product_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    voter_email = Column(String, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    product = relationship("Product", back_populates="votes")

    __table_args__ = (
        UniqueConstraint('product_id', 'voter_email', name='uq_product_voter'),
    )


class ProductReport(Base):
    """One report per principal per product."""

    __tablename__ = "product_reports"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    product_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    reporter_email = Column(String, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    product = relationship("Product", back_populates="report_entries")

    __table_args__ = (
        UniqueConstraint('product_id', 'reporter_email', name='uq_product_reporter'),
    )
