"""Services package - Business logic layer"""

from services.attachment_service import AttachmentManager, build_backend
from services.auth_service import AuthService
from services.meal_service import MealService
from services.poop_service import PoopService

__all__ = [
    "AttachmentManager",
    "build_backend",
    "AuthService",
    "MealService",
    "PoopService",
]
