"""
Domain schemas package - Pydantic models for validation.
"""

from pydantic import BaseModel

from domain.schemas.auth_schemas import (
    RegisterRequest,
    LoginRequest,
    UserPublic,
    AuthResponse,
)
from domain.schemas.meal_schemas import ImageResponse, MealResponse
from domain.schemas.poop_schemas import PoopCreate, PoopUpdate, PoopResponse


class MessageResponse(BaseModel):
    """Plain acknowledgement"""

    message: str


__all__ = [
    # Auth schemas
    "RegisterRequest",
    "LoginRequest",
    "UserPublic",
    "AuthResponse",
    # Meal schemas
    "ImageResponse",
    "MealResponse",
    # Poop schemas
    "PoopCreate",
    "PoopUpdate",
    "PoopResponse",
    "MessageResponse",
]
