from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime


class ImageResponse(BaseModel):
    """A stored photo"""

    url: str = Field(..., description="Publicly fetchable image URL")
    key: str = Field(..., description="Opaque key used to delete the image")

    model_config = {"from_attributes": True}


class MealResponse(BaseModel):
    """Schema for meal response"""

    id: str
    user_id: str
    images: List[ImageResponse]
    image: Optional[ImageResponse] = Field(
        None, description="First image, kept for single-image clients"
    )
    description: str
    created_at: datetime
