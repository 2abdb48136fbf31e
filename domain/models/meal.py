"""Meal document model"""

from datetime import datetime
from typing import List, Optional

from bson import ObjectId

from app.exceptions import ServiceValidationError
from domain.models.attachment import StoredImage
from domain.models.document import clean_text, utcnow


class Meal:
    """
    A logged meal with one or more photos.

    ``image`` mirrors ``images[0]`` for clients that only read a single photo.
    """

    def __init__(
        self,
        user_id: ObjectId,
        description: str,
        images: Optional[List[StoredImage]] = None,
        image: Optional[StoredImage] = None,
        id: Optional[ObjectId] = None,
        created_at: Optional[datetime] = None,
    ):
        self.id = id
        self.user_id = user_id
        self.description = clean_text(description)
        self.images = list(images or [])
        self.image = image if image is not None else (self.images[0] if self.images else None)
        self.created_at = created_at or utcnow()

    def replace_images(self, images: List[StoredImage]) -> List[str]:
        """Swap in a new image set; returns the deletion keys of the old one."""
        stale = self.image_keys()
        self.images = list(images)
        self.image = self.images[0] if self.images else None
        return stale

    def image_keys(self) -> List[str]:
        """Every stored key referenced by this meal, legacy mirror included."""
        keys: List[str] = []
        for img in self.images + ([self.image] if self.image else []):
            if img.key and img.key not in keys:
                keys.append(img.key)
        return keys

    def validate(self) -> None:
        if not self.description:
            raise ServiceValidationError("Description is required")
        if not self.images:
            raise ServiceValidationError("At least one image is required")

    def to_document(self) -> dict:
        doc = {
            "user_id": self.user_id,
            "images": [img.to_dict() for img in self.images],
            "image": self.image.to_dict() if self.image else None,
            "description": self.description,
            "created_at": self.created_at,
        }
        if self.id is not None:
            doc["_id"] = self.id
        return doc

    @classmethod
    def from_document(cls, doc: dict) -> "Meal":
        images = [StoredImage.from_dict(i) for i in doc.get("images") or []]
        images = [i for i in images if i is not None]
        image = StoredImage.from_dict(doc.get("image"))
        if not images and image is not None:
            # records written before multi-image support
            images = [image]
        return cls(
            id=doc["_id"],
            user_id=doc["user_id"],
            description=doc.get("description", ""),
            images=images,
            image=image,
            created_at=doc.get("created_at"),
        )
