"""Moderation of submitted products."""
import logging
from enum import Enum
from typing import Any, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from techelevate.models.product import Product, ProductStatus
from techelevate.services.errors import ProductNotFound

logger = logging.getLogger(__name__)


class ModerationAction(str, Enum):
    """Actions a moderator can take on a product's status."""
    ACCEPT = "Accept"
    REJECT = "Reject"


_ACTION_TO_STATUS = {
    ModerationAction.ACCEPT: ProductStatus.ACCEPTED,
    ModerationAction.REJECT: ProductStatus.REJECTED,
}


def parse_action(action: Any) -> Optional[ModerationAction]:
    """Return the recognized action, or None for anything else."""
    if isinstance(action, ModerationAction):
        return action
    try:
        return ModerationAction(action)
    except ValueError:
        return None


def apply_moderation(
    db: Session,
    product_id: UUID,
    action: Any = None,
    make_featured: Optional[bool] = None,
) -> Product:
    """
    Apply a moderator decision to a product.

    Only ``Accept`` and ``Reject`` change the status; any other action is a
    no-op. ``make_featured=True`` features the product; there is no way to
    un-feature it here. Re-moderating an accepted or rejected product
    overwrites the earlier decision.

    Raises:
        ProductNotFound: No product with this id
    """
    product = db.get(Product, product_id)
    if product is None:
        raise ProductNotFound()

    recognized = parse_action(action)
    if recognized is not None:
        previous = product.status
        product.status = _ACTION_TO_STATUS[recognized].value
        logger.info(f"Product {product_id} moderated: {previous} -> {product.status}")
    elif action is not None:
        logger.info(f"Ignoring unrecognized moderation action {action!r} for product {product_id}")

    if make_featured is True and not product.is_featured:
        product.is_featured = True
        logger.info(f"Product {product_id} featured")

    db.commit()
    db.refresh(product)
    return product
