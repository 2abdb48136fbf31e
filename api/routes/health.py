"""Health check routes"""

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
import logging

from adapters import mongo_adapter
from app.context import AppContext
from api.dependencies import get_context

router = APIRouter(tags=["Health"])
logger = logging.getLogger("gutcheck.api.health")


@router.get("/", response_class=PlainTextResponse)
def root():
    """Liveness message"""
    return "GutCheck API is running"


@router.get("/health-check")
def health_check(ctx: AppContext = Depends(get_context)):
    """Health check including a MongoDB ping"""
    database = "ok" if mongo_adapter.ping(ctx.db) else "unavailable"
    return {"status": "ok", "service": ctx.settings.app_name, "database": database}
