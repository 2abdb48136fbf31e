from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class PoopCreate(BaseModel):
    """Schema for creating a poop entry"""

    description: Optional[str] = Field(
        None, description="Free-text symptom description (required, non-blank)"
    )


class PoopUpdate(BaseModel):
    """Schema for updating a poop entry; blank or missing leaves it unchanged"""

    description: Optional[str] = None


class PoopResponse(BaseModel):
    """Schema for poop entry response"""

    id: str
    user_id: str
    description: str
    created_at: datetime
