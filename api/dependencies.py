"""
API dependencies for dependency injection.

Handlers receive the process context (and pieces of it) through ``Depends``
instead of importing module-level singletons.
"""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.context import AppContext
from app.exceptions import UnauthorizedError
from app.security import TokenService

bearer_scheme = HTTPBearer(auto_error=False)


def get_context(request: Request) -> AppContext:
    """
    The AppContext created by the application lifespan.

    Usage:
        @router.get("/example")
        def example(ctx: AppContext = Depends(get_context)):
            ...
    """
    context = getattr(request.app.state, "context", None)
    if context is None:
        raise RuntimeError("Application context is not initialised")
    return context


def get_token_service(ctx: AppContext = Depends(get_context)) -> TokenService:
    return ctx.tokens


def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> str:
    """
    Auth gate: the caller's user id from ``Authorization: Bearer <token>``.

    The user record is not loaded; the token claim is trusted.
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Authorization header missing")
    return tokens.verify(credentials.credentials)
