"""
Journal entry mappers.
Convert Meal and Poop documents into response DTOs with string ids.
"""

from domain.models import Meal, Poop
from domain.schemas.meal_schemas import ImageResponse, MealResponse
from domain.schemas.poop_schemas import PoopResponse


class MealMapper:
    """Mapper for meal transformations."""

    @staticmethod
    def to_response(meal: Meal) -> MealResponse:
        return MealResponse(
            id=str(meal.id),
            user_id=str(meal.user_id),
            images=[ImageResponse.model_validate(i) for i in meal.images],
            image=ImageResponse.model_validate(meal.image) if meal.image else None,
            description=meal.description,
            created_at=meal.created_at,
        )


class PoopMapper:
    """Mapper for poop entry transformations."""

    @staticmethod
    def to_response(poop: Poop) -> PoopResponse:
        return PoopResponse(
            id=str(poop.id),
            user_id=str(poop.user_id),
            description=poop.description,
            created_at=poop.created_at,
        )
