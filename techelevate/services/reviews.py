"""Product reviews."""
import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from techelevate.models.review import Review
from techelevate.models.user import User
from techelevate.services.products import get_product

logger = logging.getLogger(__name__)


def list_reviews(db: Session, product_id: UUID) -> List[Review]:
    """Reviews for a product, newest first."""
    get_product(db, product_id)
    return (
        db.query(Review)
        .filter(Review.product_id == product_id)
        .order_by(Review.created_at.desc())
        .all()
    )


def add_review(
    db: Session,
    product_id: UUID,
    reviewer: User,
    rating: int,
    comment: Optional[str] = None,
) -> Review:
    """Post a review as ``reviewer``."""
    get_product(db, product_id)

    review = Review(
        product_id=product_id,
        reviewer_email=reviewer.email,
        reviewer_name=reviewer.name,
        reviewer_image=reviewer.photo_url,
        rating=rating,
        comment=comment,
    )
    db.add(review)
    db.commit()
    db.refresh(review)

    logger.info(f"Review posted on product {product_id} by {reviewer.email}")
    return review
