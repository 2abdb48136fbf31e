"""
Process context: everything a request handler needs, built once at startup.
"""

import logging
import pathlib
from typing import Optional

from pymongo import MongoClient
from pymongo.database import Database

from adapters import mongo_adapter
from app.config import Settings, StorageBackendType
from app.security import PasswordHasher, TokenService
from services.attachment_service import AttachmentManager

logger = logging.getLogger("gutcheck.context")


class AppContext:
    """Holds configuration, the database handle, auth helpers and attachments."""

    def __init__(
        self,
        settings: Settings,
        db: Database,
        attachments: AttachmentManager,
        tokens: Optional[TokenService] = None,
        client: Optional[MongoClient] = None,
        passwords: Optional[PasswordHasher] = None,
    ):
        self.settings = settings
        self.db = db
        self.attachments = attachments
        self.tokens = tokens or TokenService.from_settings(settings)
        self.passwords = passwords or PasswordHasher.from_settings(settings)
        self.client = client

    @classmethod
    def create(cls, settings: Settings) -> "AppContext":
        """Connect to MongoDB (with retries), ensure indexes and build the storage backend."""
        settings.check_runtime()
        client, db = mongo_adapter.connect(
            settings.mongodb_uri,
            settings.mongo_db_name,
            attempts=settings.db_init_attempts,
            delay_sec=settings.db_init_delay_sec,
        )
        try:
            mongo_adapter.ensure_indexes(db)
            if settings.storage_backend == StorageBackendType.LOCAL:
                pathlib.Path(settings.uploads_dir, "meals").mkdir(parents=True, exist_ok=True)
            attachments = AttachmentManager.from_settings(settings)
        except Exception:
            mongo_adapter.close(client)
            raise
        logger.info("Using %s image storage", settings.storage_backend.value)
        return cls(settings, db, attachments, client=client)

    def close(self) -> None:
        self.attachments.close()
        if self.client is not None:
            mongo_adapter.close(self.client)
