"""Token schemas."""
from pydantic import BaseModel


class TokenRequest(BaseModel):
    """Schema for requesting an access token."""
    email: str = ""


class TokenResponse(BaseModel):
    """Schema for token response."""
    token: str
    token_type: str = "bearer"
