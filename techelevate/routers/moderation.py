"""Moderator routes: review queue, reported products, decisions."""
from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from techelevate.db import get_db
from techelevate.dependencies import require_moderator
from techelevate.models.product import ProductStatus
from techelevate.models.user import User
from techelevate.schemas.product import ModerationRequest, ProductResponse
from techelevate.services import products as product_service
from techelevate.services.moderation import apply_moderation

router = APIRouter(prefix="/moderation", tags=["moderation"])


@router.get("/products", response_model=list[ProductResponse])
async def review_queue(
    status: Optional[ProductStatus] = None,
    db: Session = Depends(get_db),
    moderator: User = Depends(require_moderator)
):
    """All products, pending ones first."""
    return product_service.list_review_queue(db, status=status)


@router.get("/reported", response_model=list[ProductResponse])
async def reported_products(
    db: Session = Depends(get_db),
    moderator: User = Depends(require_moderator)
):
    """Products with at least one report, most reported first."""
    return product_service.list_reported_products(db)


@router.patch("/products/{product_id}", response_model=ProductResponse)
async def moderate_product(
    product_id: UUID,
    decision: ModerationRequest,
    db: Session = Depends(get_db),
    moderator: User = Depends(require_moderator)
):
    """Accept, reject and/or feature a product."""
    return apply_moderation(
        db,
        product_id,
        action=decision.action,
        make_featured=decision.is_featured,
    )
