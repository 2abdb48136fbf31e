"""
User domain mappers.
Handles transformation between document models and auth DTOs.
"""

from domain.models import User
from domain.schemas.auth_schemas import AuthResponse, UserPublic


class UserMapper:
    """Mapper for user-related transformations."""

    @staticmethod
    def to_public(user: User) -> UserPublic:
        return UserPublic(id=str(user.id), email=user.email)

    @staticmethod
    def to_auth_response(user: User, token: str) -> AuthResponse:
        """
        Build the register/login payload.

        Args:
            user: Persisted User (id assigned)
            token: Signed access token for that user

        Returns:
            AuthResponse DTO with the token and the public user view
        """
        return AuthResponse(token=token, user=UserMapper.to_public(user))
