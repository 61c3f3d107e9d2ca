"""Submission quota gate and product creation.

Unsubscribed users may own at most ``FREE_PRODUCT_QUOTA`` products. The count
and the insert are separate statements: two simultaneous submissions from a
user at the limit can both pass the check. This race is accepted.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from techelevate.models.product import Product, ProductStatus
from techelevate.models.user import User
from techelevate.services.errors import OwnerNotRegistered, QuotaExceeded
from techelevate.settings import settings

logger = logging.getLogger(__name__)


def count_owned_products(db: Session, owner_email: str) -> int:
    return db.query(func.count(Product.id)).filter(
        Product.owner_email == owner_email
    ).scalar() or 0


def authorize_submission(db: Session, owner_email: str, free_quota: Optional[int] = None) -> User:
    """
    Decide whether ``owner_email`` may submit another product.

    Args:
        db: Database session
        owner_email: Email of the submitting user
        free_quota: Products allowed without a subscription (defaults to settings)

    Returns:
        The owner's user record

    Raises:
        OwnerNotRegistered: No user record for this email
        QuotaExceeded: Owner is unsubscribed and already at the free quota
    """
    if free_quota is None:
        free_quota = settings.FREE_PRODUCT_QUOTA

    owner = db.query(User).filter(User.email == owner_email).first()
    if owner is None:
        raise OwnerNotRegistered()

    existing_count = count_owned_products(db, owner_email)
    if not owner.is_subscribed and existing_count >= free_quota:
        logger.info(f"Submission denied for {owner_email}: {existing_count} product(s), not subscribed")
        raise QuotaExceeded()

    return owner


def create_product(db: Session, owner_email: str, payload: Dict[str, Any]) -> Product:
    """
    Create a product after passing the quota gate.

    ``payload`` carries the descriptive fields only; status, feature flag,
    counters and ledgers always start from their initial values.
    """
    owner = authorize_submission(db, owner_email)

    product = Product(
        owner_email=owner.email,
        owner_name=payload.get("owner_name") or owner.name,
        owner_image=payload.get("owner_image") or owner.photo_url,
        product_name=payload["product_name"],
        product_image=payload.get("product_image"),
        description=payload.get("description"),
        tags=list(payload.get("tags") or []),
        external_link=payload.get("external_link"),
        status=ProductStatus.PENDING.value,
        is_featured=False,
        upvotes=0,
        reports=0,
        created_at=datetime.now(timezone.utc),
    )
    db.add(product)
    db.commit()
    db.refresh(product)

    logger.info(f"Product {product.id} submitted by {owner_email}")
    return product
