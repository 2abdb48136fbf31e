"""
Meal Repository - Data access layer for meal entries
"""

from pymongo.database import Database

from adapters.mongo_adapter import MEALS
from domain.models import Meal
from repositories.base import OwnedRepository


class MealRepository(OwnedRepository[Meal]):
    """Repository for meal data access"""

    collection_name = MEALS

    def __init__(self, db: Database):
        super().__init__(db, Meal.from_document)
