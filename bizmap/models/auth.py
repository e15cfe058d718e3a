"""Pydantic models for authentication."""
from typing import Optional

from pydantic import Field

from bizmap.models.base import BizMapModel, BizMapRecord


class Credentials(BizMapModel):
    """Login request body. Held only for the duration of the call."""
    username: str
    password: str = Field(..., repr=False)


class RegisterRequest(BizMapModel):
    """Registration request model."""
    username: str
    email: str
    password: str = Field(..., repr=False)
    full_name: str
    phone: Optional[str] = None


class User(BizMapRecord):
    """User profile as returned by the backend."""
    id: str
    username: str
    email: str
    full_name: str
    phone: str = ""
    is_active: bool = True


class AuthResult(BizMapRecord):
    """Authentication response model."""
    access_token: str = Field(..., repr=False)
    refresh_token: str = Field(..., repr=False)
    token_type: str = "Bearer"
    expires_in: int = Field(..., description="Token lifetime in seconds")
    user: User
