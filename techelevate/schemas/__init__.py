"""Pydantic schemas."""
from techelevate.schemas.common import MessageResponse
from techelevate.schemas.product import ProductCreate, ProductResponse, ModerationRequest
from techelevate.schemas.user import UserUpsert, UserResponse

__all__ = [
    "MessageResponse",
    "ProductCreate",
    "ProductResponse",
    "ModerationRequest",
    "UserUpsert",
    "UserResponse",
]
