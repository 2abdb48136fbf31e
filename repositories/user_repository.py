"""
User Repository - Data access layer for user credentials
"""

from typing import Optional
import logging

from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from adapters.mongo_adapter import USERS
from app.exceptions import ConflictError
from domain.models import User, normalize_email
from repositories.base import BaseRepository

logger = logging.getLogger("gutcheck.repositories.user")

EMAIL_TAKEN_MESSAGE = "Email already registered"


class UserRepository(BaseRepository[User]):
    """Repository for user data access"""

    collection_name = USERS

    def __init__(self, db: Database):
        super().__init__(db, User.from_document)

    def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email (case-insensitive, trimmed)"""
        normalized = normalize_email(email)
        if not normalized:
            return None
        doc = self.collection.find_one({"email": normalized})
        return User.from_document(doc) if doc else None

    def create(self, user: User) -> User:
        """
        Insert a new user.

        Raises:
            ConflictError: if the email is already registered
        """
        try:
            return super().create(user)
        except DuplicateKeyError:
            logger.info("Duplicate registration rejected by unique index")
            raise ConflictError(EMAIL_TAKEN_MESSAGE)
