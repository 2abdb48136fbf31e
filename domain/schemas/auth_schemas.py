from pydantic import BaseModel, Field
from typing import Optional


class RegisterRequest(BaseModel):
    """Credentials for a new account.

    Fields are optional here so that a missing value is reported by the
    service as a 400 with a readable message.
    """

    email: Optional[str] = Field(None, description="Login email, matched case-insensitively")
    password: Optional[str] = Field(None, description="Plaintext password")


class LoginRequest(BaseModel):
    """Credentials for an existing account"""

    email: Optional[str] = Field(None, description="Login email")
    password: Optional[str] = Field(None, description="Plaintext password")


class UserPublic(BaseModel):
    """Public view of a user"""

    id: str
    email: str


class AuthResponse(BaseModel):
    """Token returned by register and login"""

    token: str = Field(..., description="Bearer token, valid for 7 days")
    user: UserPublic
