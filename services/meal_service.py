from typing import List, Optional
import logging

from pymongo.database import Database

from app.exceptions import NotFoundError, ServiceValidationError
from domain.models import Meal, UploadedImage, clean_text, to_object_id
from repositories import MealRepository
from services.attachment_service import AttachmentManager

logger = logging.getLogger("gutcheck.meals")

MEAL_NOT_FOUND = "Meal not found"


class MealService:
    @staticmethod
    def create_meal(
        db: Database,
        attachments: AttachmentManager,
        owner_id: str,
        description: Optional[str],
        images: List[UploadedImage],
    ) -> Meal:
        """
        Log a meal with its photos.

        Images are stored before the record is written; if the write fails the
        freshly stored images are discarded again.

        Raises:
            ServiceValidationError: blank description or no images
            StorageError: the backend rejected an image
        """
        if not clean_text(description):
            raise ServiceValidationError("Description is required")
        if not images:
            raise ServiceValidationError("At least one image is required")

        stored = attachments.store_many(owner_id, images)
        meal = Meal(user_id=to_object_id(owner_id), description=description, images=stored)
        try:
            meal = MealRepository(db).create(meal)
        except Exception:
            attachments.discard([s.key for s in stored])
            raise

        logger.info("Created meal %s with %d image(s)", meal.id, len(stored))
        return meal

    @staticmethod
    def list_meals(db: Database, owner_id: str) -> List[Meal]:
        return MealRepository(db).list_owned(owner_id)

    @staticmethod
    def get_meal(db: Database, owner_id: str, meal_id: str) -> Meal:
        meal = MealRepository(db).get_owned(owner_id, meal_id)
        if meal is None:
            raise NotFoundError(MEAL_NOT_FOUND)
        return meal

    @staticmethod
    def update_meal(
        db: Database,
        attachments: AttachmentManager,
        owner_id: str,
        meal_id: str,
        description: Optional[str] = None,
        images: Optional[List[UploadedImage]] = None,
        tasks=None,
    ) -> Meal:
        """
        Replace the description and/or the full image set of a meal.

        New images are stored first and swapped in with one document write;
        the previous images are then deleted best-effort (in the background
        when ``tasks`` is given). A failing deletion never fails the update.
        """
        repo = MealRepository(db)
        meal = repo.get_owned(owner_id, meal_id)
        if meal is None:
            raise NotFoundError(MEAL_NOT_FOUND)

        if clean_text(description):
            meal.description = clean_text(description)

        stale_keys: List[str] = []
        new_keys: List[str] = []
        if images:
            stored = attachments.store_many(owner_id, images)
            new_keys = [s.key for s in stored]
            stale_keys = meal.replace_images(stored)

        try:
            saved = repo.save(meal)
        except Exception:
            attachments.discard(new_keys)
            raise
        if saved is None:
            # deleted concurrently
            attachments.discard(new_keys)
            raise NotFoundError(MEAL_NOT_FOUND)

        attachments.discard(stale_keys, tasks)
        logger.info("Updated meal %s (replaced %d image(s))", meal.id, len(stale_keys))
        return saved

    @staticmethod
    def delete_meal(
        db: Database,
        attachments: AttachmentManager,
        owner_id: str,
        meal_id: str,
        tasks=None,
    ) -> None:
        """Remove a meal and, best-effort, every image it references."""
        repo = MealRepository(db)
        meal = repo.get_owned(owner_id, meal_id)
        if meal is None or not repo.delete_owned(owner_id, meal_id):
            raise NotFoundError(MEAL_NOT_FOUND)

        attachments.discard(meal.image_keys(), tasks)
        logger.info("Deleted meal %s", meal.id)
