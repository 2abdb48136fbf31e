"""
Domain mappers package.
Handles transformation between document models and DTOs (Data Transfer Objects).
"""

from domain.mappers.user_mapper import UserMapper
from domain.mappers.entry_mapper import MealMapper, PoopMapper

__all__ = ["UserMapper", "MealMapper", "PoopMapper"]
