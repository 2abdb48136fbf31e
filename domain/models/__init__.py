"""
Domain models package - MongoDB document models.
"""

from domain.models.document import utcnow, to_object_id, clean_text
from domain.models.attachment import StoredImage, UploadedImage, DeletionReport
from domain.models.user import User, normalize_email
from domain.models.meal import Meal
from domain.models.poop import Poop

__all__ = [
    # Helpers
    "utcnow",
    "to_object_id",
    "clean_text",
    # Attachments
    "StoredImage",
    "UploadedImage",
    "DeletionReport",
    # Documents
    "User",
    "normalize_email",
    "Meal",
    "Poop",
]
