"""Review Pydantic schemas."""
from pydantic import BaseModel, Field
from datetime import datetime
from uuid import UUID
from typing import Optional


class ReviewCreate(BaseModel):
    """Schema for creating a review."""
    rating: int = Field(..., ge=1, le=5, description="Rating from 1 to 5 stars")
    comment: Optional[str] = Field(None, max_length=2000, description="Optional review comment")


class ReviewResponse(BaseModel):
    """Schema for review response."""
    id: UUID
    product_id: UUID
    reviewer_email: str
    reviewer_name: Optional[str] = None
    reviewer_image: Optional[str] = None
    rating: int
    comment: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True
