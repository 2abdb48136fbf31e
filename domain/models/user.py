"""User document model"""

from datetime import datetime
from typing import Optional

from bson import ObjectId

from app.exceptions import ServiceValidationError
from domain.models.document import utcnow


def normalize_email(email: Optional[str]) -> str:
    """Emails are matched case-insensitively and without surrounding spaces."""
    return (email or "").strip().lower()


class User:
    """Login credentials for one account."""

    def __init__(
        self,
        email: str,
        password_hash: str,
        id: Optional[ObjectId] = None,
        created_at: Optional[datetime] = None,
    ):
        self.id = id
        self.email = normalize_email(email)
        self.password_hash = password_hash
        self.created_at = created_at or utcnow()

    def validate(self) -> None:
        if not self.email:
            raise ServiceValidationError("Email is required")
        if not self.password_hash:
            raise ServiceValidationError("Password is required")

    def to_document(self) -> dict:
        doc = {
            "email": self.email,
            "password_hash": self.password_hash,
            "created_at": self.created_at,
        }
        if self.id is not None:
            doc["_id"] = self.id
        return doc

    @classmethod
    def from_document(cls, doc: dict) -> "User":
        return cls(
            id=doc["_id"],
            email=doc["email"],
            password_hash=doc["password_hash"],
            created_at=doc.get("created_at"),
        )
