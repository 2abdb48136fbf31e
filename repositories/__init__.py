"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository, OwnedRepository
from repositories.user_repository import UserRepository
from repositories.meal_repository import MealRepository
from repositories.poop_repository import PoopRepository

__all__ = [
    "BaseRepository",
    "OwnedRepository",
    "UserRepository",
    "MealRepository",
    "PoopRepository",
]
