"""Authentication schema models."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Token(BaseModel):
    """Token schema."""

    access_token: str
    token_type: str = "bearer"
    expires_in: float


class Credentials(BaseModel):
    """Email/password pair for sign-up and sign-in.

    Both default to empty so missing values reach the service and come back as
    an inline error instead of a schema error.
    """

    email: str = Field("", description="Email address")
    password: str = Field("", description="Password")


class AuthResult(BaseModel):
    """Outcome of a sign-up or failed sign-in: exactly one of the fields is set."""

    success: Optional[str] = None
    error: Optional[str] = None


class UserResponse(BaseModel):
    """Public view of the authenticated user."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    is_active: bool = True
    created_at: Optional[datetime] = None
    last_sign_in_at: Optional[datetime] = None
