"""Admin dashboard schemas."""
from pydantic import BaseModel


class AdminStats(BaseModel):
    """Site-wide counts."""
    products_by_status: dict[str, int]
    total_products: int
    total_users: int
    total_reviews: int
