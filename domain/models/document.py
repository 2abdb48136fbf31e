"""
Helpers shared by the document models.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from bson import ObjectId


def utcnow() -> datetime:
    # Naive UTC with millisecond precision, as MongoDB stores it
    now = datetime.now(tz=timezone.utc).replace(tzinfo=None)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)


def to_object_id(value: Any) -> Optional[ObjectId]:
    """Parse a document id, returning None for anything that is not one."""
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return None


def clean_text(value: Optional[str]) -> str:
    return (value or "").strip()
