"""Product routes: submission, listings, upvotes and reports."""
from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from techelevate.db import get_db
from techelevate.dependencies import require_principal, require_user
from techelevate.models.user import User
from techelevate.schemas.common import MessageResponse
from techelevate.schemas.product import (
    AcceptedProductsResponse, LedgerResponse, ProductCreate,
    ProductCreatedResponse, ProductResponse, ProductUpdate
)
from techelevate.services import ledger, products as product_service
from techelevate.services.errors import ValidationError
from techelevate.services.quota import create_product
from techelevate.settings import settings

router = APIRouter(tags=["products"])


# ============================================================================
# PUBLIC ENDPOINTS
# ============================================================================

@router.get("/products", response_model=list[ProductResponse])
async def list_owner_products(owner_email: str = "", db: Session = Depends(get_db)):
    """Products submitted by one owner (user dashboard)."""
    if not owner_email:
        raise ValidationError("Owner email is required.")
    return product_service.list_owner_products(db, owner_email)


@router.get("/products/{product_id}", response_model=ProductResponse)
async def get_product(product_id: UUID, db: Session = Depends(get_db)):
    return product_service.get_product(db, product_id)


@router.get("/accepted-products", response_model=AcceptedProductsResponse)
async def list_accepted_products(
    search: str = "",
    page: int = 1,
    db: Session = Depends(get_db)
):
    """Accepted products with tag search and pagination (products page)."""
    page = max(page, 1)
    items, total_pages = product_service.list_accepted_products(
        db, search=search, page=page, per_page=settings.ACCEPTED_PAGE_SIZE
    )
    return AcceptedProductsResponse(
        products=[ProductResponse.model_validate(p) for p in items],
        total_pages=total_pages,
        page=page
    )


@router.get("/featured-products", response_model=list[ProductResponse])
async def list_featured_products(db: Session = Depends(get_db)):
    return product_service.list_featured_products(db, limit=settings.FEATURED_LIMIT)


@router.get("/trending-products", response_model=list[ProductResponse])
async def list_trending_products(db: Session = Depends(get_db)):
    return product_service.list_trending_products(db, limit=settings.TRENDING_LIMIT)


# ============================================================================
# AUTHENTICATED ENDPOINTS
# ============================================================================

@router.post("/products", response_model=ProductCreatedResponse, status_code=status.HTTP_201_CREATED)
async def submit_product(
    payload: ProductCreate,
    db: Session = Depends(get_db),
    principal: str = Depends(require_principal)
):
    """Submit a product. Unsubscribed users are limited to the free quota."""
    product = create_product(db, principal, payload.to_payload())
    return ProductCreatedResponse(
        message="Product added successfully.",
        product_id=product.id
    )


@router.put("/products/{product_id}", response_model=ProductResponse)
async def edit_product(
    product_id: UUID,
    payload: ProductUpdate,
    db: Session = Depends(get_db),
    principal: str = Depends(require_principal)
):
    """Edit own product's descriptive fields."""
    return product_service.update_product(db, product_id, principal, payload.to_changes())


@router.delete("/products/{product_id}", response_model=MessageResponse)
async def remove_product(
    product_id: UUID,
    db: Session = Depends(get_db),
    user: User = Depends(require_user)
):
    """Delete own product, or any product as a moderator."""
    product_service.delete_product(db, product_id, user)
    return MessageResponse(message="Product deleted successfully.")


@router.post("/products/{product_id}/upvote", response_model=LedgerResponse)
async def upvote_product(
    product_id: UUID,
    db: Session = Depends(get_db),
    principal: str = Depends(require_principal)
):
    """Upvote a product once."""
    product = ledger.cast_upvote(db, product_id, principal)
    return LedgerResponse(message="Vote recorded", upvotes=product.upvotes, reports=product.reports)


@router.post("/products/{product_id}/report", response_model=LedgerResponse)
async def report_product(
    product_id: UUID,
    db: Session = Depends(get_db),
    principal: str = Depends(require_principal)
):
    """Report a product once."""
    product = ledger.file_report(db, product_id, principal)
    return LedgerResponse(
        message="Product reported successfully",
        upvotes=product.upvotes,
        reports=product.reports
    )
