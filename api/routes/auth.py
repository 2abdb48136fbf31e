"""Registration and login routes (no auth gate)"""

from fastapi import APIRouter, Depends, status
import logging

from app.context import AppContext
from api.dependencies import get_context
from domain.schemas.auth_schemas import AuthResponse, LoginRequest, RegisterRequest
from services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])
logger = logging.getLogger("gutcheck.api.auth")


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, ctx: AppContext = Depends(get_context)):
    """Create an account; returns a bearer token and the public user view"""
    return AuthService.register(
        ctx.db, ctx.tokens, ctx.passwords, payload.email, payload.password
    )


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, ctx: AppContext = Depends(get_context)):
    """Exchange email and password for a bearer token"""
    return AuthService.login(
        ctx.db, ctx.tokens, ctx.passwords, payload.email, payload.password
    )
