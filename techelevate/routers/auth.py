"""Access token routes."""
from fastapi import APIRouter

from techelevate.schemas.auth import TokenRequest, TokenResponse
from techelevate.services.auth import create_access_token
from techelevate.services.errors import ValidationError

router = APIRouter(tags=["auth"])


@router.post("/jwt", response_model=TokenResponse)
async def issue_token(payload: TokenRequest):
    """
    Issue an access token for a principal signed in with the identity provider.

    Raises:
        ValidationError: If email is missing
    """
    email = payload.email.strip()
    if not email:
        raise ValidationError("Email is required")

    return TokenResponse(token=create_access_token(email))
