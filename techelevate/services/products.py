"""Product queries and owner-side edits."""
import logging
import math
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import case, func, select
from sqlalchemy.orm import Session

from techelevate.models.product import Product, ProductStatus
from techelevate.models.user import User
from techelevate.services.errors import PermissionDenied, ProductNotFound

logger = logging.getLogger(__name__)

# Fields an owner may change after submission
EDITABLE_FIELDS = (
    "product_name",
    "product_image",
    "description",
    "tags",
    "external_link",
    "owner_name",
    "owner_image",
)


def get_product(db: Session, product_id: UUID) -> Product:
    """
    Get a product by id.

    Raises:
        ProductNotFound: No product with this id
    """
    product = db.get(Product, product_id)
    if product is None:
        raise ProductNotFound()
    return product


def _tag_elements(db: Session):
    """One row per element of Product.tags, as text."""
    if db.get_bind().dialect.name == "sqlite":
        return func.json_each(Product.tags).table_valued("value")
    return func.json_array_elements_text(Product.tags).table_valued("value")


def list_owner_products(db: Session, owner_email: str) -> List[Product]:
    return (
        db.query(Product)
        .filter(Product.owner_email == owner_email)
        .order_by(Product.created_at.desc())
        .all()
    )


def list_accepted_products(
    db: Session,
    search: str = "",
    page: int = 1,
    per_page: int = 6,
) -> Tuple[List[Product], int]:
    """
    Accepted products, newest first, filtered by a case-insensitive tag match.

    Returns:
        Tuple of (products on the page, total pages)
    """
    page = max(page, 1)
    query = db.query(Product).filter(Product.status == ProductStatus.ACCEPTED.value)

    search = (search or "").strip()
    if search:
        tag = _tag_elements(db)
        matching_tag = (
            select(tag.c.value)
            .where(func.lower(tag.c.value).contains(search.lower(), autoescape=True))
            .exists()
        )
        query = query.filter(matching_tag)

    total = query.count()
    products = (
        query.order_by(Product.created_at.desc())
        .offset((page - 1) * per_page)
        .limit(per_page)
        .all()
    )
    return products, math.ceil(total / per_page)


def list_featured_products(db: Session, limit: int = 4) -> List[Product]:
    return (
        db.query(Product)
        .filter(
            Product.is_featured == True,  # noqa: E712
            Product.status == ProductStatus.ACCEPTED.value,
        )
        .order_by(Product.created_at.desc())
        .limit(limit)
        .all()
    )


def list_trending_products(db: Session, limit: int = 6) -> List[Product]:
    return (
        db.query(Product)
        .filter(Product.status == ProductStatus.ACCEPTED.value)
        .order_by(Product.upvotes.desc(), Product.created_at.desc())
        .limit(limit)
        .all()
    )


def list_review_queue(db: Session, status: Optional[ProductStatus] = None) -> List[Product]:
    """All products for moderators, pending ones first."""
    query = db.query(Product)
    if status is not None:
        query = query.filter(Product.status == status.value)

    pending_first = case((Product.status == ProductStatus.PENDING.value, 0), else_=1)
    return query.order_by(pending_first, Product.created_at.desc()).all()


def list_reported_products(db: Session) -> List[Product]:
    return (
        db.query(Product)
        .filter(Product.reports > 0)
        .order_by(Product.reports.desc(), Product.created_at.desc())
        .all()
    )


def count_by_status(db: Session) -> Dict[str, int]:
    """Product counts grouped by moderation status."""
    counts = {s.value: 0 for s in ProductStatus}
    rows = (
        db.query(Product.status, func.count(Product.id))
        .group_by(Product.status)
        .all()
    )
    for status, count in rows:
        counts[status] = count
    return counts


def update_product(
    db: Session,
    product_id: UUID,
    principal: str,
    changes: Dict[str, Any],
) -> Product:
    """
    Edit the descriptive fields of a product. Only the owner may edit.

    Moderation status, feature flag, counters and ledgers are not editable
    here; unknown keys in ``changes`` are ignored.

    Raises:
        ProductNotFound: No product with this id
        PermissionDenied: Principal is not the owner
    """
    product = get_product(db, product_id)
    if product.owner_email != principal:
        raise PermissionDenied("Only the owner can edit this product")

    for field in EDITABLE_FIELDS:
        if field in changes and changes[field] is not None:
            value = changes[field]
            setattr(product, field, list(value) if field == "tags" else value)

    db.commit()
    db.refresh(product)
    logger.info(f"Product {product_id} edited by owner")
    return product


def delete_product(db: Session, product_id: UUID, user: User) -> None:
    """
    Delete a product with its ledgers and reviews.

    Raises:
        ProductNotFound: No product with this id
        PermissionDenied: User is neither the owner nor a moderator
    """
    product = get_product(db, product_id)
    if product.owner_email != user.email and not user.is_moderator:
        raise PermissionDenied("Only the owner or a moderator can delete this product")

    db.delete(product)
    db.commit()
    logger.info(f"Product {product_id} deleted by {user.email}")
