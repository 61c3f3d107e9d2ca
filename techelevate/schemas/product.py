"""Product Pydantic schemas."""
from pydantic import BaseModel, Field, HttpUrl
from datetime import datetime
from uuid import UUID
from typing import Any, Optional


# Request Schemas
class ProductCreate(BaseModel):
    """Schema for submitting a product."""
    product_name: str = Field(..., min_length=1, max_length=200)
    product_image: Optional[str] = None
    description: Optional[str] = Field(None, max_length=5000)
    tags: list[str] = Field(default_factory=list)
    external_link: Optional[HttpUrl] = None
    owner_name: Optional[str] = None
    owner_image: Optional[str] = None

    def to_payload(self) -> dict[str, Any]:
        data = self.model_dump()
        if data["external_link"] is not None:
            data["external_link"] = str(data["external_link"])
        return data


class ProductUpdate(BaseModel):
    """Schema for editing a product's descriptive fields."""
    product_name: Optional[str] = Field(None, min_length=1, max_length=200)
    product_image: Optional[str] = None
    description: Optional[str] = Field(None, max_length=5000)
    tags: Optional[list[str]] = None
    external_link: Optional[HttpUrl] = None
    owner_name: Optional[str] = None
    owner_image: Optional[str] = None

    def to_changes(self) -> dict[str, Any]:
        data = self.model_dump(exclude_unset=True)
        if data.get("external_link") is not None:
            data["external_link"] = str(data["external_link"])
        return data


class ModerationRequest(BaseModel):
    """
    Schema for a moderator decision.

    ``action`` is deliberately a free string: only "Accept" and "Reject"
    change the status, anything else is ignored.
    """
    action: Optional[str] = None
    is_featured: Optional[bool] = None


# Response Schemas
class ProductResponse(BaseModel):
    """Schema for product response."""
    id: UUID
    product_name: str
    product_image: Optional[str] = None
    description: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    external_link: Optional[str] = None
    owner_email: str
    owner_name: Optional[str] = None
    owner_image: Optional[str] = None
    status: str
    is_featured: bool
    upvotes: int
    reports: int
    voters: list[str] = Field(default_factory=list)
    reported_by: list[str] = Field(default_factory=list)
    created_at: datetime

    class Config:
        from_attributes = True


class ProductCreatedResponse(BaseModel):
    """Schema returned after submission."""
    success: bool = True
    message: str
    product_id: UUID


class AcceptedProductsResponse(BaseModel):
    """Schema for a page of accepted products."""
    products: list[ProductResponse]
    total_pages: int
    page: int


class LedgerResponse(BaseModel):
    """Schema returned after an upvote or report."""
    message: str
    upvotes: int
    reports: int
