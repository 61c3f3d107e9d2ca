"""Product review routes."""
from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from techelevate.db import get_db
from techelevate.dependencies import require_user
from techelevate.models.user import User
from techelevate.schemas.review import ReviewCreate, ReviewResponse
from techelevate.services.reviews import add_review, list_reviews

router = APIRouter(prefix="/products/{product_id}/reviews", tags=["reviews"])


@router.get("", response_model=list[ReviewResponse])
async def get_reviews(product_id: UUID, db: Session = Depends(get_db)):
    return list_reviews(db, product_id)


@router.post("", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED)
async def post_review(
    product_id: UUID,
    review_data: ReviewCreate,
    db: Session = Depends(get_db),
    user: User = Depends(require_user)
):
    """Post a review as the signed-in user."""
    return add_review(db, product_id, user, rating=review_data.rating, comment=review_data.comment)
