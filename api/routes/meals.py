"""Meal journal routes (multipart, with photos)"""

from fastapi import APIRouter, BackgroundTasks, Depends, File, Form, UploadFile, status
import logging
from typing import List, Optional

from app.context import AppContext
from api.dependencies import get_context, get_current_user_id
from api.uploads import read_image_uploads
from domain.mappers import MealMapper
from domain.schemas import MessageResponse
from domain.schemas.meal_schemas import MealResponse
from services.meal_service import MealService

router = APIRouter(prefix="/meals", tags=["Meals"])
logger = logging.getLogger("gutcheck.api.meals")


@router.post("", response_model=MealResponse, status_code=status.HTTP_201_CREATED)
def create_meal(
    description: Optional[str] = Form(None),
    images: Optional[List[UploadFile]] = File(None, description="Up to 10 image files"),
    user_id: str = Depends(get_current_user_id),
    ctx: AppContext = Depends(get_context),
):
    """Log a meal with a description and at least one photo"""
    uploads = read_image_uploads(images, ctx.settings)
    meal = MealService.create_meal(ctx.db, ctx.attachments, user_id, description, uploads)
    return MealMapper.to_response(meal)


@router.get("", response_model=List[MealResponse])
def list_meals(
    user_id: str = Depends(get_current_user_id),
    ctx: AppContext = Depends(get_context),
):
    """All meals of the caller, newest first"""
    return [MealMapper.to_response(m) for m in MealService.list_meals(ctx.db, user_id)]


@router.get("/{meal_id}", response_model=MealResponse)
def get_meal(
    meal_id: str,
    user_id: str = Depends(get_current_user_id),
    ctx: AppContext = Depends(get_context),
):
    return MealMapper.to_response(MealService.get_meal(ctx.db, user_id, meal_id))


@router.post("/{meal_id}", response_model=MealResponse)
def update_meal(
    meal_id: str,
    background_tasks: BackgroundTasks,
    description: Optional[str] = Form(None),
    images: Optional[List[UploadFile]] = File(None),
    user_id: str = Depends(get_current_user_id),
    ctx: AppContext = Depends(get_context),
):
    """
    Update a meal.

    - A non-blank `description` replaces the current one.
    - Any `images` replace the whole image set; the old files are removed
      after the response is sent.
    """
    uploads = read_image_uploads(images, ctx.settings)
    meal = MealService.update_meal(
        ctx.db,
        ctx.attachments,
        user_id,
        meal_id,
        description=description,
        images=uploads,
        tasks=background_tasks,
    )
    return MealMapper.to_response(meal)


@router.delete("/{meal_id}", response_model=MessageResponse)
def delete_meal(
    meal_id: str,
    background_tasks: BackgroundTasks,
    user_id: str = Depends(get_current_user_id),
    ctx: AppContext = Depends(get_context),
):
    """Delete a meal; its photos are removed after the response is sent"""
    MealService.delete_meal(ctx.db, ctx.attachments, user_id, meal_id, tasks=background_tasks)
    return {"message": "Meal deleted"}
