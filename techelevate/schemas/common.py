"""Shared response schemas."""
from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Plain message response."""
    message: str
