from typing import Optional
import logging

from pymongo.database import Database

from app.exceptions import ConflictError, ServiceValidationError, UnauthorizedError
from app.security import PasswordHasher, TokenService
from domain.mappers import UserMapper
from domain.models import User
from domain.schemas.auth_schemas import AuthResponse
from repositories import UserRepository
from repositories.user_repository import EMAIL_TAKEN_MESSAGE

logger = logging.getLogger("gutcheck.auth")

MISSING_CREDENTIALS_MESSAGE = "Email and password are required"
INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


def _require_credentials(email: Optional[str], password: Optional[str]) -> None:
    if not (email or "").strip() or not password:
        raise ServiceValidationError(MISSING_CREDENTIALS_MESSAGE)


class AuthService:
    @staticmethod
    def register(
        db: Database,
        tokens: TokenService,
        passwords: PasswordHasher,
        email: Optional[str],
        password: Optional[str],
    ) -> AuthResponse:
        """
        Create an account and sign a token for it.

        Raises:
            ServiceValidationError: email or password missing
            ConflictError: email already registered
        """
        _require_credentials(email, password)
        repo = UserRepository(db)

        if repo.get_by_email(email) is not None:
            raise ConflictError(EMAIL_TAKEN_MESSAGE)

        # unique index still guards against a concurrent registration
        user = repo.create(User(email=email, password_hash=passwords.hash(password)))
        logger.info("Registered user %s", user.id)
        return UserMapper.to_auth_response(user, tokens.issue(str(user.id)))

    @staticmethod
    def login(
        db: Database,
        tokens: TokenService,
        passwords: PasswordHasher,
        email: Optional[str],
        password: Optional[str],
    ) -> AuthResponse:
        """
        Check credentials and sign a token.

        Unknown email and wrong password raise the same UnauthorizedError.
        """
        _require_credentials(email, password)
        user = UserRepository(db).get_by_email(email)

        if user is None or not passwords.verify(password, user.password_hash):
            logger.info("Failed login attempt")
            raise UnauthorizedError(INVALID_CREDENTIALS_MESSAGE)

        return UserMapper.to_auth_response(user, tokens.issue(str(user.id)))
