"""Database models."""
from techelevate.models.user import User, UserRole
from techelevate.models.product import Product, ProductStatus, ProductVote, ProductReport
from techelevate.models.coupon import Coupon
from techelevate.models.review import Review

__all__ = [
    "User",
    "UserRole",
    "Product",
    "ProductStatus",
    "ProductVote",
    "ProductReport",
    "Coupon",
    "Review",
]
