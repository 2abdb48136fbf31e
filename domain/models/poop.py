"""Poop (digestive symptom) document model"""

from datetime import datetime
from typing import Optional

from bson import ObjectId

from app.exceptions import ServiceValidationError
from domain.models.document import clean_text, utcnow


class Poop:
    """A textual symptom note, kept apart from meals."""

    def __init__(
        self,
        user_id: ObjectId,
        description: str,
        id: Optional[ObjectId] = None,
        created_at: Optional[datetime] = None,
    ):
        self.id = id
        self.user_id = user_id
        self.description = clean_text(description)
        self.created_at = created_at or utcnow()

    def validate(self) -> None:
        if not self.description:
            raise ServiceValidationError("Description is required")

    def to_document(self) -> dict:
        doc = {
            "user_id": self.user_id,
            "description": self.description,
            "created_at": self.created_at,
        }
        if self.id is not None:
            doc["_id"] = self.id
        return doc

    @classmethod
    def from_document(cls, doc: dict) -> "Poop":
        return cls(
            id=doc["_id"],
            user_id=doc["user_id"],
            description=doc.get("description", ""),
            created_at=doc.get("created_at"),
        )
