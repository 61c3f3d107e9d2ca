"""Upvote and report ledgers.

Each principal may upvote a product once and report it once. The ledger row
and the counter increment are written in the same transaction; the unique
constraint on the ledger table is what admits or rejects the action, so two
concurrent requests from the same principal cannot both be counted.
"""
import logging
from uuid import UUID

from sqlalchemy import and_, exists, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from techelevate.models.product import Product, ProductVote, ProductReport
from techelevate.services.errors import (
    AlreadyActed, ProductNotFound, SelfInteractionForbidden
)

logger = logging.getLogger(__name__)


def _append_to_ledger(
    db: Session,
    product_id: UUID,
    principal: str,
    entry,
    actor_column,
    counter,
    already_message: str,
    self_message: str,
) -> Product:
    product = db.get(Product, product_id)
    if product is None:
        raise ProductNotFound()

    if product.owner_email == principal:
        raise SelfInteractionForbidden(self_message)

    try:
        db.add(entry)
        db.flush()
        db.execute(
            update(Product)
            .where(Product.id == product_id)
            .values({counter: counter + 1})
            .execution_options(synchronize_session=False)
        )
        db.commit()
    except IntegrityError:
        db.rollback()
        # The product may have been deleted after it was read
        if not db.query(exists().where(Product.id == product_id)).scalar():
            raise ProductNotFound()
        duplicate = exists().where(
            and_(actor_column.class_.product_id == product_id, actor_column == principal)
        )
        if db.query(duplicate).scalar():
            raise AlreadyActed(already_message)
        raise

    db.refresh(product)
    return product


def cast_upvote(db: Session, product_id: UUID, principal: str) -> Product:
    """
    Record an upvote from ``principal``.

    Raises:
        ProductNotFound: No product with this id
        SelfInteractionForbidden: Principal owns the product
        AlreadyActed: Principal has already upvoted
    """
    product = _append_to_ledger(
        db,
        product_id,
        principal,
        entry=ProductVote(product_id=product_id, voter_email=principal),
        actor_column=ProductVote.voter_email,
        counter=Product.upvotes,
        already_message="You can only vote once",
        self_message="You cannot vote on your own product",
    )
    logger.info(f"Upvote recorded on product {product_id} (total {product.upvotes})")
    return product


def file_report(db: Session, product_id: UUID, principal: str) -> Product:
    """
    Record a report from ``principal``.

    Raises:
        ProductNotFound: No product with this id
        SelfInteractionForbidden: Principal owns the product
        AlreadyActed: Principal has already reported
    """
    product = _append_to_ledger(
        db,
        product_id,
        principal,
        entry=ProductReport(product_id=product_id, reporter_email=principal),
        actor_column=ProductReport.reporter_email,
        counter=Product.reports,
        already_message="You have already reported this product",
        self_message="You cannot report your own product",
    )
    logger.info(f"Report filed on product {product_id} (total {product.reports})")
    return product
