"""Poop journal routes"""

from fastapi import APIRouter, Depends, status
import logging
from typing import List, Optional

from app.context import AppContext
from api.dependencies import get_context, get_current_user_id
from domain.mappers import PoopMapper
from domain.schemas import MessageResponse
from domain.schemas.poop_schemas import PoopCreate, PoopResponse, PoopUpdate
from services.poop_service import PoopService

router = APIRouter(prefix="/poops", tags=["Poops"])
logger = logging.getLogger("gutcheck.api.poops")


@router.post("", response_model=PoopResponse, status_code=status.HTTP_201_CREATED)
def create_poop(
    payload: PoopCreate,
    user_id: str = Depends(get_current_user_id),
    ctx: AppContext = Depends(get_context),
):
    poop = PoopService.create_poop(ctx.db, user_id, payload.description)
    return PoopMapper.to_response(poop)


@router.get("", response_model=List[PoopResponse])
def list_poops(
    user_id: str = Depends(get_current_user_id),
    ctx: AppContext = Depends(get_context),
):
    """All poop entries of the caller, newest first"""
    return [PoopMapper.to_response(p) for p in PoopService.list_poops(ctx.db, user_id)]


@router.get("/{poop_id}", response_model=PoopResponse)
def get_poop(
    poop_id: str,
    user_id: str = Depends(get_current_user_id),
    ctx: AppContext = Depends(get_context),
):
    return PoopMapper.to_response(PoopService.get_poop(ctx.db, user_id, poop_id))


@router.put("/{poop_id}", response_model=PoopResponse)
def update_poop(
    poop_id: str,
    payload: Optional[PoopUpdate] = None,
    user_id: str = Depends(get_current_user_id),
    ctx: AppContext = Depends(get_context),
):
    """Replace the description; a blank or missing one leaves the entry unchanged"""
    description = payload.description if payload else None
    poop = PoopService.update_poop(ctx.db, user_id, poop_id, description)
    return PoopMapper.to_response(poop)


@router.delete("/{poop_id}", response_model=MessageResponse)
def delete_poop(
    poop_id: str,
    user_id: str = Depends(get_current_user_id),
    ctx: AppContext = Depends(get_context),
):
    PoopService.delete_poop(ctx.db, user_id, poop_id)
    return {"message": "Poop entry deleted"}
